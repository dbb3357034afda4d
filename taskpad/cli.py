"""
taskpad command line.

    taskpad add "Pay rent" --date 01-11-2026 --repeats Monthly
    taskpad new
    taskpad edit 3
    taskpad list --format json
    taskpad delete 3
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Settings, configure, get_config
from .dates import date_to_display_text, get_today, parse_date
from .errors import RepeatParseError, TaskNotFoundError, TaskpadError
from .repeat import Repeat, parse_repeat, repeat_to_text
from .store import TaskStore
from .task import Task
from .task_page import PageAction, TaskPage

logger = logging.getLogger(__name__)

FORMATS = ("short", "json")


def format_task(task: Task, fmt: Optional[str], settings: Settings) -> str:
    if fmt == "json":
        return json.dumps(task.to_dict())

    parts = [f"[{task.id}] {task.name}", date_to_display_text(task.date, settings)]
    if not task.repeats.is_never:
        parts.append(f"repeats {repeat_to_text(task.repeats)}")
    if task.group:
        parts.append(f"group {task.group}")
    if task.url:
        parts.append(task.url)
    line = " | ".join(parts)
    if task.description:
        line += f"\n    {task.description}"
    return line


def cmd_add(args: argparse.Namespace, settings: Settings, store: TaskStore) -> int:
    task = Task(name=args.name)
    task.date = parse_date(args.date or "", settings) or get_today()
    try:
        task.repeats = parse_repeat(args.repeats or "")
    except RepeatParseError:
        logger.warning("ignoring unrecognized repeat rule %r", args.repeats)
        task.repeats = Repeat.never()
    task.set_group(args.group)
    task.set_description(args.description)
    task.set_url(args.url)

    task_id = store.add(task)
    store.save()
    print(format_task(store.get(task_id), args.format, settings))
    return 0


def _run_page(page: TaskPage, store: TaskStore) -> int:
    action = page.run(store)
    if action is PageAction.SAVED:
        store.save()
    return 0


def cmd_new(args: argparse.Namespace, settings: Settings, store: TaskStore) -> int:
    return _run_page(TaskPage(settings), store)


def cmd_edit(args: argparse.Namespace, settings: Settings, store: TaskStore) -> int:
    task = store.get(args.id)
    if task is None:
        raise TaskNotFoundError(args.id)
    return _run_page(TaskPage(settings, task), store)


def cmd_list(args: argparse.Namespace, settings: Settings, store: TaskStore) -> int:
    for task in store.tasks():
        print(format_task(task, args.format, settings))
    return 0


def cmd_delete(args: argparse.Namespace, settings: Settings, store: TaskStore) -> int:
    if not store.delete(args.id):
        raise TaskNotFoundError(args.id)
    store.save()
    return 0


COMMANDS = {
    "add": cmd_add,
    "new": cmd_new,
    "edit": cmd_edit,
    "list": cmd_list,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskpad", description="Terminal task manager")
    parser.add_argument("--config", help="Path to config.toml")
    parser.add_argument("--data", help="Path to the tasks JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # taskpad add
    add_parser = subparsers.add_parser("add", help="Add a task without opening the form")
    add_parser.add_argument("name", help="The name of the new task")
    add_parser.add_argument("--date", help="The date the task is due")
    add_parser.add_argument("--repeats", help="How often the task repeats")
    add_parser.add_argument("--group", help="The group the task belongs to")
    add_parser.add_argument("--description", help="A description for your task")
    add_parser.add_argument("--url", help="A url for your task")
    add_parser.add_argument("--format", choices=FORMATS, help="The format to display the new task with")

    # taskpad new / edit
    subparsers.add_parser("new", help="Create a task in the interactive form")
    edit_parser = subparsers.add_parser("edit", help="Edit a task in the interactive form")
    edit_parser.add_argument("id", type=int, help="Task id")

    # taskpad list
    list_parser = subparsers.add_parser("list", help="List tasks by due date")
    list_parser.add_argument("--format", choices=FORMATS, help="Output format")

    # taskpad delete
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task id")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command not in COMMANDS:
        parser.print_help()
        return 1

    try:
        settings = configure(config_path=args.config) if args.config else get_config()
        data_file = Path(args.data) if args.data else settings.data_file
        store = TaskStore.load(data_file)
        return COMMANDS[args.command](args, settings, store)
    except TaskpadError as e:
        logger.debug("command %s failed: %r", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
