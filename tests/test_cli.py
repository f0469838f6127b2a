import json
import logging

import pytest

from tfplansummary.cli import build_parser, main, render_man_page
from tfplansummary.logformat import FAILURE, LOGGER_NAME
from tfplansummary.summarize import DEFAULT_ENV_PROJECT_REGEX


def _write_plan(directory, name, actions):
    plan = {
        "resource_changes": [
            {"address": "aws_s3_bucket.example", "change": {"actions": actions}}
        ]
    }
    path = directory / f"{name}.tfplan.json"
    path.write_text(json.dumps(plan))
    return path


def test_summarize_defaults():
    args = build_parser().parse_args(["summarize"])
    assert args.plans_dir == "plans"
    assert args.env_project_regex == DEFAULT_ENV_PROJECT_REGEX
    assert args.plan_detail is None
    assert args.debug is False


def test_summarize_with_detail_and_options():
    args = build_parser().parse_args(
        ["summarize", "live__app", "--plans-dir", "elsewhere", "--debug"]
    )
    assert args.plan_detail == "live__app"
    assert args.plans_dir == "elsewhere"
    assert args.debug is True


def test_too_many_arguments_fails(capsys):
    assert main(["summarize", "a", "b"]) == 1
    assert FAILURE in capsys.readouterr().out


def test_version_rejects_arguments(capsys):
    assert main(["version", "extra"]) == 1
    assert FAILURE in capsys.readouterr().out


def test_summarize_all(tmp_path, capsys):
    _write_plan(tmp_path, "live__team__env__app", ["create"])
    assert main(["summarize", "--plans-dir", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "PLAN_FILE" in out
    assert "live__team__env__app" in out
    assert "team/env/app" in out


def test_summarize_detailed(tmp_path, capsys):
    _write_plan(tmp_path, "live__team__env__app", ["create"])
    assert main(["summarize", "live__team__env__app", "--plans-dir", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "PROJECT CHANGES => live/team/env/app" in out
    assert "aws_s3_bucket.example" in out


def test_summarize_empty_directory(tmp_path, capsys):
    assert main(["summarize", "--plans-dir", str(tmp_path)]) == 0
    assert "NO PLAN FILE FOUND" in capsys.readouterr().out


def test_summarize_bad_regex_fails(tmp_path, capsys):
    _write_plan(tmp_path, "live__app", ["create"])
    code = main(["summarize", "--plans-dir", str(tmp_path), "--env-project-regex", "^(.*)$"])
    assert code == 1
    out = capsys.readouterr().out
    assert FAILURE in out
    assert "could not extract the environment and project name" in out


def test_summarize_broken_json_fails(tmp_path, capsys):
    (tmp_path / "live__app.tfplan.json").write_text("{not json")
    assert main(["summarize", "--plans-dir", str(tmp_path)]) == 1
    assert "Error parsing json plan" in capsys.readouterr().out


def test_version_output(capsys):
    assert main(["version"]) == 0
    out = capsys.readouterr().out
    assert "VERSION" in out
    assert "Application:" in out
    assert "Build Time :" in out


def test_debug_flag_sets_level(capsys):
    assert main(["--debug", "version"]) == 0
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    assert main(["version"]) == 0
    assert logging.getLogger(LOGGER_NAME).level == logging.INFO


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "summarize" in out
    assert "version" in out


def test_man_command_prints_roff(capsys):
    assert main(["man"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(".TH TF\\-PLAN\\-SUMMARY 1")
    assert ".SH COMMANDS" in out


def test_render_man_page_lists_visible_commands():
    page = render_man_page(build_parser())
    assert ".SS summarize" in page
    assert ".SS version" in page
    assert ".SS man" not in page
    assert "\\fB\\-\\-plans\\-dir\\fP" in page


@pytest.mark.parametrize("argv", [["--help"], ["summarize", "--help"]])
def test_help_exits_cleanly(argv, capsys):
    assert main(argv) == 0
    assert "usage:" in capsys.readouterr().out