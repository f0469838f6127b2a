"""Command line interface: summarize plans, show the version, emit a man page."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from tfplansummary import version
from tfplansummary.logformat import FAILURE, configure_logging
from tfplansummary.summarize import DEFAULT_ENV_PROJECT_REGEX, PlanError, summarize

PROG = "tf-plan-summary"
SHORT = "tf-plan-summary is a tool to generate summaries from a terragrunt run-* command"
DEFAULT_PLANS_DIR = "plans"


class UsageError(Exception):
    """The command line could not be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


Handler = Callable[[argparse.Namespace, argparse.ArgumentParser], None]


def _add_debug(parser: argparse.ArgumentParser, default: object) -> None:
    parser.add_argument("--debug", action="store_true", default=default, help="Debug Output")


def _run_summarize(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    summarize(args.plans_dir, args.plan_detail or "", args.env_project_regex)


def _run_version(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    logger = configure_logging(debug=args.debug)
    logger.info("\n%s\n", "VERSION")
    version.show(logger)


def _run_man(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    sys.stdout.write(render_man_page(parser))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its sub-commands."""
    parser = _Parser(prog=PROG, description=SHORT)
    _add_debug(parser, False)
    parser.set_defaults(handler=None)
    commands = parser.add_subparsers(title="commands", metavar="COMMAND")

    summarize_help = "Generates summaries from one or more terragrunt plan"
    sub = commands.add_parser("summarize", help=summarize_help, description=summarize_help)
    _add_debug(sub, argparse.SUPPRESS)
    sub.add_argument("plan_detail", nargs="?", default=None, help="Name of a plan to show in detail")
    sub.add_argument(
        "--plans-dir",
        default=DEFAULT_PLANS_DIR,
        help="Directories where the plans are stored.",
    )
    sub.add_argument(
        "--env-project-regex",
        default=DEFAULT_ENV_PROJECT_REGEX,
        help="Regex to parse the environment and project name from the project path",
    )
    sub.set_defaults(handler=_run_summarize)

    version_help = "Print current application version"
    sub = commands.add_parser("version", help=version_help, description=version_help)
    _add_debug(sub, argparse.SUPPRESS)
    sub.set_defaults(handler=_run_version)

    # Hidden: registered without help text so it is left out of listings.
    sub = commands.add_parser("man", description="Generates command line manpages")
    _add_debug(sub, argparse.SUPPRESS)
    sub.set_defaults(handler=_run_man)
    return parser


def _escape(text: str) -> str:
    text = text.replace("\\", "\\e").replace("-", "\\-")
    if text.startswith((".", "'")):
        text = "\\&" + text
    return text


def _option_lines(parser: argparse.ArgumentParser) -> list[str]:
    lines: list[str] = []
    for action in parser._actions:
        if not action.option_strings:
            continue
        label = "\\fB" + ", ".join(_escape(o) for o in action.option_strings) + "\\fP"
        if action.nargs != 0:
            metavar = action.metavar or action.dest.upper()
            label += f" \\fI{_escape(str(metavar))}\\fP"
        lines.extend([".TP", label])
        help_text = action.help or ""
        if action.nargs != 0 and action.default not in (None, argparse.SUPPRESS):
            help_text += f" (default: {action.default})"
        lines.append(_escape(help_text))
    return lines


def _subcommands(parser: argparse.ArgumentParser) -> list[tuple[str, str, argparse.ArgumentParser]]:
    found = []
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            for choice in action._choices_actions:
                found.append((choice.dest, choice.help or "", action.choices[choice.dest]))
    return found


def render_man_page(parser: argparse.ArgumentParser) -> str:
    """Return a section 1 manual page in roff for ``parser``."""
    prog = parser.prog
    lines = [
        f".TH {_escape(prog.upper())} 1",
        ".SH NAME",
        f"{_escape(prog)} \\- {_escape(parser.description or '')}",
        ".SH SYNOPSIS",
        f"\\fB{_escape(prog)}\\fP [\\fIcommand\\fP] [\\fIflags\\fP]",
        ".SH DESCRIPTION",
        _escape(parser.description or ""),
        ".SH OPTIONS",
        *_option_lines(parser),
        ".SH COMMANDS",
    ]
    for name, help_text, sub in _subcommands(parser):
        positionals = " ".join(
            f"[\\fI{_escape(a.dest)}\\fP]" for a in sub._actions if not a.option_strings
        )
        lines.extend([".SS " + _escape(name), _escape(help_text), ".PP"])
        synopsis = f"\\fB{_escape(prog)} {_escape(name)}\\fP"
        if positionals:
            synopsis += " " + positionals
        lines.append(synopsis)
        lines.extend(_option_lines(sub))
    return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    logger = configure_logging()
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        logger.error("%s %s", FAILURE, exc)
        return 1
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    logger = configure_logging(debug=args.debug)
    handler: Handler | None = args.handler
    if handler is None:
        parser.print_help(sys.stdout)
        return 0
    try:
        handler(args, parser)
    except (PlanError, OSError, ValueError) as exc:
        logger.error("%s %s", FAILURE, exc)
        return 1
    return 0