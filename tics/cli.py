"""Command-line entry point for the tics repository tool."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from tics.branch_ops import (
    MergeConflictError,
    checkout_branch,
    create_branch,
    list_branches,
    merge_branch,
)
from tics.cad_ops import add_cad, diff_cad, simulate_cad, simulate_iot
from tics.commit_ops import (
    add_file,
    commit,
    diff_file,
    restore_file,
    show_file_history,
    show_log,
)
from tics.file_ops import TicsError
from tics.repo_ops import get_current_branch, init_repo, status
from tics.stash_ops import stash_list, stash_pop, stash_push
from tics.tag_ops import create_tag, list_tags

PROG = "tics"

_COMMAND_LIST = (
    "Commands: init, add, commit, status, log, branch, checkout, merge, stash, pop, "
    "list, tag, list-tags, iot, cad, diff, restore, add-cad, diff-cad, history"
)

_ONE_ARG = {
    "init": "<repo_name>",
    "add": "<filename>",
    "branch": "<name>",
    "checkout": "<name>",
    "merge": "<branch_name>",
    "tag": "<tag_name>",
    "diff": "<filename>",
    "restore": "<filename>",
    "add-cad": "<filename>",
    "diff-cad": "<filename>",
    "history": "<filename>",
}


def _print_names(header: str, names: list[str]) -> None:
    print(header)
    print("\n".join(names) if names else "(none)")


def _init(args: list[str]) -> None:
    init_repo(args[0])
    print(f"Initialized empty tics repository in {args[0]}/.tics")


def _add(args: list[str]) -> None:
    add_file(args[0])
    print(f"Staged: {args[0]}")


def _commit(args: list[str]) -> None:
    commit(args[1])
    print(f'Committed: "{args[1]}"')


def _status(args: list[str]) -> None:
    report = status()
    for line in report.render().splitlines():
        print(line)


def _log(args: list[str]) -> None:
    for line in show_log():
        print(line)


def _branch(args: list[str]) -> None:
    create_branch(args[0])
    print(f"Created branch: {args[0]}")


def _checkout(args: list[str]) -> None:
    checkout_branch(args[0])
    print(f"Switched to branch: {args[0]}")


def _merge(args: list[str]) -> None:
    current = get_current_branch()
    stamp = merge_branch(args[0])
    print(f"Merged branch {args[0]} into {current} (commit {stamp})")


def _stash_list(args: list[str]) -> None:
    _print_names("Stashed changes:", stash_list())


def _tag(args: list[str]) -> None:
    create_tag(args[0])
    print(f"Created tag: {args[0]}")


def _iot(args: list[str]) -> None:
    simulate_iot()
    print("IIoT data appended to sensor_data.txt")


def _cad(args: list[str]) -> None:
    simulate_cad()
    print("CAD event written to cad_log.txt")


def _diff(args: list[str]) -> None:
    diffs = diff_file(args[0])
    print(f"Diff ({args[0]}):")
    for d in diffs:
        print(f"Line {d.line}:\n  Working: {d.working}\n  Staged: {d.staged}")


def _restore(args: list[str]) -> None:
    restore_file(args[0])
    print(f"Restored: {args[0]}")


def _add_cad(args: list[str]) -> None:
    add_cad(args[0])
    print(f"Staged CAD: {args[0]} → .tics/stage/")


def _diff_cad(args: list[str]) -> None:
    text = diff_cad(args[0])
    print(f"CAD Metadata Diff ({args[0]}):")
    print(text, end="")


def _history(args: list[str]) -> None:
    lines = show_file_history(args[0])
    print(f"History for {args[0]}:")
    for line in lines:
        print(line)


_COMMANDS: dict[str, Callable[[list[str]], None]] = {
    "init": _init,
    "add": _add,
    "commit": _commit,
    "list-branches": lambda args: _print_names("Available branches:", list_branches()),
    "status": _status,
    "log": _log,
    "branch": _branch,
    "checkout": _checkout,
    "merge": _merge,
    "stash": lambda args: stash_push(),
    "pop": lambda args: stash_pop(),
    "list": _stash_list,
    "tag": _tag,
    "list-tags": lambda args: _print_names("Available tags:", list_tags()),
    "iot": _iot,
    "cad": _cad,
    "diff": _diff,
    "restore": _restore,
    "add-cad": _add_cad,
    "diff-cad": _diff_cad,
    "history": _history,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one tics command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(f"Usage: {PROG} <command> [args]")
        print(_COMMAND_LIST)
        return 1

    command, rest = args[0], args[1:]
    handler = _COMMANDS.get(command)
    if command == "commit" and not (len(rest) == 2 and rest[0] == "-m"):
        handler = None
    if handler is None:
        print(f"Unknown command: {command}")
        return 1
    if command in _ONE_ARG and len(rest) != 1:
        print(f"Usage: {PROG} {command} {_ONE_ARG[command]}")
        return 1

    try:
        handler(rest)
    except MergeConflictError as exc:
        for line in exc.conflicts:
            print(line)
        print(exc)
    except TicsError as exc:
        print(exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())