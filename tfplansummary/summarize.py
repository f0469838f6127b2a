"""Summaries of Terraform/Terragrunt JSON plan files."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from tfplansummary.logformat import LOGGER_NAME
from tfplansummary.table import GREEN, RED, RESET, YELLOW, Table

PLAN_SUFFIX = ".tfplan.json"
DEFAULT_ENV_PROJECT_REGEX = r"^/?([^/]+)/?(.*)"
MAX_CELL_WIDTH = 32

_PLAN_FILE_PATTERN = re.compile(r"tfplan+\.(json)$")

READ = "[read]"
CREATE = "[create]"
UPDATE = "[update]"
DELETE = "[delete]"
NO_OP = "[no-op]"
REPLACE = frozenset({"[delete create]", "[create delete]"})

_log = logging.getLogger(LOGGER_NAME)


class PlanError(Exception):
    """A plan file could not be read, parsed or named."""


@dataclass
class ResourceActions:
    """An action on a resource and the components in which it happens."""

    action: str
    components: list[str] = field(default_factory=list)


def _format_actions(actions: Any) -> str:
    if actions is None:
        return "<nil>"
    if isinstance(actions, (list, tuple)):
        return "[" + " ".join(str(a) for a in actions) + "]"
    return str(actions)


def get_resource_changes(
    raw_plan: Mapping[str, Any], component_path: str
) -> tuple[list[str], list[str], list[str]]:
    """Return the addresses, actions and component of every resource change."""
    changes = raw_plan.get("resource_changes")
    if changes is None:
        return [], [], []
    resources: list[str] = []
    actions: list[str] = []
    components: list[str] = []
    try:
        for change in changes:
            address = change["address"]
            if not isinstance(address, str):
                raise TypeError("address is not a string")
            resources.append(address)
            actions.append(_format_actions(change["change"]["actions"]))
            components.append(component_path)
    except (KeyError, TypeError) as exc:
        raise PlanError(f"malformed resource_changes block: {exc}") from exc
    return resources, actions, components


def find_plan_files(directory: str | os.PathLike[str]) -> list[str]:
    """Return the sorted paths under ``directory`` named like ``*.tfplan.json``."""
    root = os.fspath(directory)
    found: list[str] = []
    if not os.path.exists(root):
        return found
    if _PLAN_FILE_PATTERN.search(os.path.basename(root)):
        found.append(root)
    for current, dirnames, filenames in os.walk(root):
        for name in [*dirnames, *filenames]:
            if _PLAN_FILE_PATTERN.search(name):
                found.append(os.path.join(current, name))
    return sorted(found)


def action_exists(action: str, actions: Iterable[ResourceActions]) -> bool:
    """Return True if any entry in ``actions`` has the given action."""
    return any(entry.action == action for entry in actions)


def format_counter(counter: int) -> str:
    """Return the counter as text, or ``-`` when it is zero."""
    return "-" if counter == 0 else str(counter)


def _plan_name(path: str) -> str:
    return os.path.basename(path).removesuffix(PLAN_SUFFIX)


def _load_plan(path: str) -> dict[str, Any]:
    try:
        text = Path(path).read_bytes()
    except OSError as exc:
        raise PlanError(f"Error reading json plan: {path} => {exc}") from exc
    try:
        plan = json.loads(text)
    except ValueError as exc:
        raise PlanError(f"Error parsing json plan: {path} => {exc}") from exc
    if not isinstance(plan, dict):
        raise PlanError(f"Error parsing json plan: {path} => not a JSON object")
    return plan


def _print_colored(text: str) -> None:
    _log.info("%s", f"\x1b[1;93m{text}\x1b[0m")


def summarize_detailed_plan(
    plan_files: Iterable[str], detail_plan: str
) -> dict[str, list[ResourceActions]]:
    """Log a per-resource table for the named plan.

    Returns the changed resources mapped to their actions and components.
    """
    mapped: dict[str, list[ResourceActions]] = {}
    for path in plan_files:
        plan_name = _plan_name(path)
        if plan_name != detail_plan:
            continue
        component_path = plan_name.replace("__", "/")
        raw_plan = _load_plan(path)
        resources, actions, components = get_resource_changes(raw_plan, component_path)

        for resource, action, component in zip(resources, actions, components):
            entries = mapped.setdefault(resource, [])
            existing = next((e for e in entries if e.action == action), None)
            if existing is None:
                entries.append(ResourceActions(action, [component]))
            else:
                existing.components.append(component)

        _print_colored(f"\nPROJECT CHANGES => {component_path}")

        table = Table(
            ["RESOURCE", "📖", "✏️", "🆕", "🗑", "🔄"],
            header_tints=[GREEN, RESET, RESET, RESET, RESET, RESET],
            footer_tints=[RESET, RESET, YELLOW, GREEN, RED, RED],
            column_tints=[RESET, RESET, RESET, RESET, RESET, GREEN],
            max_width=MAX_CELL_WIDTH,
        )
        rows = 0
        for resource, action in zip(resources, actions):
            if action == NO_OP:
                continue
            read = "-" if action == READ else ""
            create = "-" if action == CREATE else ""
            update = "-" if action == UPDATE else ""
            delete = "-" if action == DELETE else ""
            replaced = "-" if action in REPLACE else ""
            table.append([resource, read, create, update, delete, replaced])
            rows += 1

        if rows == 0:
            table.append(["N/A"] * 6)
            table.set_footer(["-", "-", "-", "-", "-", "NO CHANGES"])
        _log.info("%s", table.render())
    return mapped


def summarize_all_plans(plan_files: Iterable[str], env_project_regex: str) -> str:
    """Log a table with one line of change counts per plan and return it."""
    table = Table(
        ["PLAN_FILE", "ENVIRONMENT", "PROJECT", "📖", "✏️", "🆕", "🗑", "🔄"],
        header_tints=[GREEN] * 8,
        footer_tints=[RED, RESET, RESET, RESET, RESET, RESET, RESET, RESET],
        column_tints=[YELLOW, RESET, RESET, RESET, YELLOW, GREEN, RED, RED],
        max_width=MAX_CELL_WIDTH,
    )
    rows = 0
    for path in plan_files:
        plan_name = _plan_name(path)
        component_path = plan_name.replace("__", "/")
        try:
            pattern = re.compile(env_project_regex)
        except re.error as exc:
            raise PlanError(f"invalid regex {env_project_regex!r}: {exc}") from exc
        match = pattern.search(component_path)
        if match is None or pattern.groups != 2:
            raise PlanError(
                "could not extract the environment and project name from the project "
                f"name using the given regex: {component_path!r}, {env_project_regex!r}"
            )
        environment = match.group(1) or ""
        project = match.group(2) or ""

        raw_plan = _load_plan(path)
        _, actions, _ = get_resource_changes(raw_plan, component_path)
        read = sum(1 for a in actions if a == READ)
        added = sum(1 for a in actions if a == CREATE)
        modified = sum(1 for a in actions if a == UPDATE)
        deleted = sum(1 for a in actions if a == DELETE)
        replaced = sum(1 for a in actions if a in REPLACE)

        table.append(
            [
                plan_name,
                environment,
                project,
                format_counter(read),
                format_counter(modified),
                format_counter(added),
                format_counter(deleted),
                format_counter(replaced),
            ]
        )
        rows += 1

    if rows == 0:
        table.append(["N/A"] * 8)
        table.set_footer(["NO PLAN FILE FOUND", "-", "-", "-", "-", "-", "-", "-"])
    rendered = table.render()
    _log.info("%s", rendered)
    return rendered


def summarize(
    plans_dir: str | os.PathLike[str],
    detail_plan: str | None = "",
    env_project_regex: str = DEFAULT_ENV_PROJECT_REGEX,
) -> None:
    """Summarize every plan under ``plans_dir``, or one plan in detail."""
    plan_files = find_plan_files(plans_dir)
    if not detail_plan:
        summarize_all_plans(plan_files, env_project_regex)
    else:
        summarize_detailed_plan(plan_files, detail_plan)