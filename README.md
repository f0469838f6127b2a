# tfplansummary

tfplansummary reads the JSON plan files produced by a `terragrunt run-*` run, or
by plain `terraform show -json`, and prints them as compact tables. It can print
one line per plan, or a per-resource breakdown of a single plan.

## Installation

```
pip install tfplansummary
```

The package needs Python 3.10 or later. Its only dependency is `wcwidth`, which
it uses to measure cell widths.

## Preparing plans

The tool collects every file or directory whose name ends in `tfplan.json`. It
looks in the plans directory and in every directory below it, then sorts the
paths. A plan's name is its file name without the `.tfplan.json` suffix. In that
name, a double underscore `__` stands for a path separator. For example,
`live__team__env__app.tfplan.json` describes the project path
`live/team/env/app`.

Each plan must be a JSON object. The tool uses its `resource_changes` list. Every
entry in that list needs an `address` and a `change.actions` list.

## Usage

To get an overview of all plans under `./plans`:

```
tf-plan-summary summarize
```

Each row shows the plan name, the environment, the project, and counts of the
resources that are read, updated, created, deleted and replaced. An action of
`delete, create` or `create, delete` counts as a replacement. A `-` means zero.
If there are no plans, the table shows a single `N/A` row with the footer
`NO PLAN FILE FOUND`.

To use a different directory:

```
tf-plan-summary summarize --plans-dir path/to/plans
```

The environment and project are taken from the project path. By default the
path is split with the regular expression `^/?([^/]+)/?(.*)`: the first segment
is the environment and the rest is the project. You can supply your own
expression. It must have exactly two capture groups, and it must match the
project path of every plan; otherwise the command fails.

```
tf-plan-summary summarize --env-project-regex '^live/([^/]+)/(.*)'
```

To list every resource change in one plan, pass the plan's name:

```
tf-plan-summary summarize live__team__env__app
```

The tool first prints a heading with the project path, then a table with one row
per changed resource. `no-op` changes are left out. If nothing changes, the table
has a single `N/A` row with the footer `NO CHANGES`.

Other commands:

```
tf-plan-summary version             # application, Python and build time
tf-plan-summary man                 # a section 1 manual page in roff
tf-plan-summary --debug summarize   # enable debug-level logging
```

If you run `tf-plan-summary` with no command, it prints its help. When a plan
cannot be read or parsed, or its name does not match the regular expression,
the command logs an error that begins with `✗` and exits with status 1.

Colours are used only when standard output is a terminal. Set `NO_COLOR`, or set
`TERM=dumb`, to turn them off.

## Library use

```python
from tfplansummary.logformat import configure_logging
from tfplansummary.summarize import summarize

configure_logging()
summarize("plans", "", "^/?([^/]+)/?(.*)")
```

`summarize` writes its tables through the `tfplansummary` logger. Call
`tfplansummary.logformat.configure_logging(stream, debug)` beforehand to send
that output to a stream; standard output is the default. If a plan cannot be
read or parsed, `summarize` raises `tfplansummary.summarize.PlanError`.

`tfplansummary.summarize` also provides lower-level functions:

- `find_plan_files(directory)`
- `get_resource_changes(raw_plan, component_path)`
- `summarize_all_plans(plan_files, env_project_regex)`, which returns the
  rendered table
- `summarize_detailed_plan(plan_files, detail_plan)`, which returns the changed
  resources mapped to lists of `ResourceActions`

`tfplansummary.table.Table` is the table renderer these functions use. It has
rounded borders, wraps cells at `max_width` columns (32 by default) and can show
an optional footer. Use `append(row)` and `set_footer(footer)` to fill it, and
`render()` to get the text.

## What it does not do

tfplansummary does not run Terraform or Terragrunt, and it does not produce plan
files. It only reads JSON plans that already exist on disk. It prints to the
console and does not save its summaries anywhere else.