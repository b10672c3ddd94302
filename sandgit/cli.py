"""CLI: argparse and command dispatch."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from .config import (
    config_path,
    get_value,
    list_values,
    load_settings,
    set_value,
    unset_value,
)
from .errors import InvalidConfigKeyError, SandgitError
from .interpreter import Interpreter, MergeDecider, RandomMergeDecider, always_clean, always_conflict
from .objects import CommandResult
from .render import render_graph, render_log
from .session import Session
from .tasks import Task, list_builtin, load_builtin, load_task

PROMPT = "$ "


def _setup_logging(debug: bool) -> None:
    if debug or os.environ.get("SANDGIT_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


def _session(args: argparse.Namespace) -> Session:
    """Session configured from the config file, env and --seed/--merge flags."""
    settings = load_settings(getattr(args, "config", None))
    mode = getattr(args, "merge", "random")
    decider: MergeDecider
    if mode == "clean":
        decider = always_clean
    elif mode == "conflict":
        decider = always_conflict
    else:
        seed = args.seed if getattr(args, "seed", None) is not None else settings.merge_seed
        decider = RandomMergeDecider(settings.merge_clean_probability, seed=seed)
    return Session(Interpreter(decide_merge=decider, author=settings.author))


def _print_result(command: str, result: CommandResult) -> None:
    print(f"{PROMPT}{command}")
    if result.output:
        print(result.output)


def _print_graph(session: Session) -> None:
    for line in render_graph(session.graph()):
        print(line)


def _print_task(task: Task) -> None:
    print(f"{task.title} [{task.difficulty}]")
    if task.description:
        print(task.description)
    if task.goal_description:
        print(f"Goal: {task.goal_description}")


def _read_commands(path: Path) -> List[str]:
    """One command per line; blank lines and '#' comments skipped."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SandgitError(f"cannot read {path}: {e}") from e
    return [ln.strip() for ln in text.splitlines() if ln.strip() and not ln.strip().startswith("#")]


def _finish(session: Session, args: argparse.Namespace, failed: bool) -> int:
    if getattr(args, "graph", False):
        print()
        _print_graph(session)
    if getattr(args, "json", False):
        print(session.snapshot_json())
    return 1 if failed else 0


def cmd_run(args: argparse.Namespace) -> int:
    commands: List[str] = []
    if args.file:
        commands.extend(_read_commands(Path(args.file)))
    if args.commands:
        commands.append(shlex.join(args.commands))
    if not commands:
        print("Error: nothing to run (give a command or -f FILE)")
        return 1
    session = _session(args)
    failed = False
    for cmd in commands:
        result = session.run(cmd)
        _print_result(cmd, result)
        failed = failed or result.is_error
    return _finish(session, args, failed)


def cmd_task(args: argparse.Namespace) -> int:
    task = load_task(args.task)
    session = _session(args)
    _print_task(task)
    print()
    failed = False
    for item in session.load_task(task):
        _print_result(item.command, CommandResult(item.output, item.is_error))
        failed = failed or item.is_error
    if args.solve:
        for cmd in task.solution_commands:
            result = session.run(cmd)
            _print_result(cmd, result)
            failed = failed or result.is_error
    return _finish(session, args, failed)


def cmd_tasks(_: argparse.Namespace) -> int:
    for name in list_builtin():
        task = load_builtin(name)
        print(f"{name:<28} {task.difficulty:<13} {task.title}")
    return 0


def _shell_command(session: Session, line: str) -> bool:
    """Handle a ':' host command. Return False to leave the shell."""
    cmd, _, rest = line[1:].partition(" ")
    if cmd in ("q", "quit", "exit"):
        return False
    if cmd == "graph":
        _print_graph(session)
    elif cmd == "log":
        for ln in render_log(session.snapshot()):
            print(ln)
    elif cmd == "state":
        print(session.snapshot_json())
    elif cmd == "reset":
        session.reset_progress()
        print("Progress reset.")
    elif cmd == "task":
        if rest.strip():
            try:
                task = load_task(rest.strip())
            except SandgitError as e:
                print(f"Error: {e}")
                return True
            for item in session.load_task(task):
                _print_result(item.command, CommandResult(item.output, item.is_error))
        if session.task is None:
            print("No task loaded.")
        else:
            _print_task(session.task)
    elif cmd == "history":
        for item in session.history:
            print(f"{'!' if item.is_error else ' '} {item.command}")
    else:
        print(":graph :log :state :history :reset :task [NAME|FILE] :quit")
    return True


def cmd_shell(args: argparse.Namespace) -> int:
    session = _session(args)
    if args.task:
        task = load_task(args.task)
        _print_task(task)
        for item in session.load_task(task):
            _print_result(item.command, CommandResult(item.output, item.is_error))
    print("Type git commands; ':help' for shell commands, ':quit' to leave.")
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        line = line.strip()
        if not line:
            continue
        if line.startswith(":"):
            if not _shell_command(session, line):
                return 0
            continue
        result = session.run(line)
        if result.output:
            print(result.output)


def cmd_config(args: argparse.Namespace) -> int:
    path = config_path(args.config)
    count = sum([args.get, args.config_set, args.unset, args.list])
    if count != 1:
        print("Error: exactly one of --get, --set, --unset, --list required")
        return 1
    try:
        if args.get:
            if not args.key:
                print("Error: --get requires <key>")
                return 1
            value = get_value(path, args.key)
            if value is None:
                return 1
            print(value)
        elif args.config_set:
            if not args.key or args.value is None:
                print("Error: --set requires <key> <value>")
                return 1
            set_value(path, args.key, args.value)
        elif args.unset:
            if not args.key:
                print("Error: --unset requires <key>")
                return 1
            if not unset_value(path, args.key):
                return 1
        else:
            for key, value in list_values(path):
                print(f"{key}={value}")
    except InvalidConfigKeyError as e:
        print(f"Error: {e}")
        return 1
    return 0


def _add_session_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", type=int, default=None, help="Seed for random merge outcomes")
    p.add_argument(
        "--merge",
        choices=["random", "clean", "conflict"],
        default="random",
        help="Merge outcome: random (default), always clean, or always conflict",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sandgit",
        description="A git sandbox: practice commands against a simulated repository and see the commit graph.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file (default: $SANDGIT_CONFIG or ./.sandgit.ini)")
    parser.add_argument("--debug", action="store_true", help="Log state transitions to stderr")
    sub = parser.add_subparsers(dest="command", help="Commands")

    # shell
    p_shell = sub.add_parser("shell", help="Interactive prompt")
    p_shell.add_argument("--task", default=None, help="Built-in scenario name or task JSON file")
    _add_session_options(p_shell)

    # run
    p_run = sub.add_parser("run", help="Run commands and print their output")
    p_run.add_argument("commands", nargs=argparse.REMAINDER, help="One command line (e.g. git status)")
    p_run.add_argument("-f", "--file", default=None, help="File with one command per line")
    p_run.add_argument("--graph", action="store_true", help="Print the commit graph afterwards")
    p_run.add_argument("--json", action="store_true", help="Print the final state as JSON")
    _add_session_options(p_run)

    # task
    p_task = sub.add_parser("task", help="Load a task and run its setup commands")
    p_task.add_argument("task", help="Built-in scenario name (e.g. S2) or task JSON file")
    p_task.add_argument("--solve", action="store_true", help="Also run the solution commands")
    p_task.add_argument("--graph", action="store_true", help="Print the commit graph afterwards")
    p_task.add_argument("--json", action="store_true", help="Print the final state as JSON")
    _add_session_options(p_task)

    # tasks
    sub.add_parser("tasks", help="List built-in scenarios")

    # config
    p_config = sub.add_parser("config", help="Read or write config")
    p_config.add_argument("--get", action="store_true", help="Get value for key")
    p_config.add_argument("--set", dest="config_set", action="store_true", help="Set key to value")
    p_config.add_argument("--unset", action="store_true", help="Unset key")
    p_config.add_argument("--list", action="store_true", help="List all key=value")
    p_config.add_argument("key", nargs="?", default=None, help="Config key (section.option)")
    p_config.add_argument("value", nargs="?", default=None, help="Value (for --set)")

    args = parser.parse_args(argv)
    _setup_logging(args.debug)
    if not args.command:
        parser.print_help()
        return 0

    handlers = {
        "shell": cmd_shell,
        "run": cmd_run,
        "task": cmd_task,
        "tasks": cmd_tasks,
        "config": cmd_config,
    }
    handler = handlers.get(args.command)
    if not handler:
        parser.print_help()
        return 1
    try:
        return handler(args) or 0
    except SandgitError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
