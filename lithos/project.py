"""Helpers for locating a project's environment: git branch lookup, branch
pattern matching and merging of configuration overrides."""

from __future__ import annotations

import copy
import fnmatch
import os
import subprocess
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

_BRANCH_ERROR = "Unable to determine git branch. Are you in a git repository?"


class GitBranchError(RuntimeError):
    """The current git branch could not be determined."""


def run_command(directory: str | os.PathLike[str], command: str) -> subprocess.CompletedProcess:
    """Run a shell command in ``directory`` and capture its output.

    Raises OSError when the shell cannot be started.
    """
    if os.name == "nt":
        args = ["cmd", "/C", command]
    else:
        args = ["sh", "-c", command]
    return subprocess.run(args, cwd=Path(directory), capture_output=True, check=False)


def get_current_branch(project_path: str | os.PathLike[str]) -> str:
    """Return the name of the git branch checked out in ``project_path``."""
    try:
        result = run_command(project_path, "git symbolic-ref --short HEAD")
    except OSError as error:
        raise GitBranchError(f"{_BRANCH_ERROR}\n\t{error}") from error

    if result.returncode != 0:
        raise GitBranchError(_BRANCH_ERROR)

    branch = result.stdout.decode("utf-8").strip()
    if not branch:
        raise GitBranchError(_BRANCH_ERROR)
    return branch


def _is_valid_glob(pattern: str) -> bool:
    if "***" in pattern:
        return False

    start = 0
    while (position := pattern.find("**", start)) != -1:
        before_ok = position == 0 or pattern[position - 1] == "/"
        after = position + 2
        after_ok = after == len(pattern) or pattern[after] == "/"
        if not (before_ok and after_ok):
            return False
        start = after

    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            close = index + 1
            if close < len(pattern) and pattern[close] == "!":
                close += 1
            if close < len(pattern) and pattern[close] == "]":
                close += 1
            close = pattern.find("]", close)
            if close == -1:
                return False
            index = close
        index += 1
    return True


def match_branch(branch: str, patterns: Iterable[str]) -> bool:
    """Return True if ``branch`` matches any of the glob ``patterns``.

    Malformed patterns are ignored.
    """
    return any(
        _is_valid_glob(pattern) and fnmatch.fnmatchcase(branch, pattern)
        for pattern in patterns
    )


def override_yaml(base: Any, overrides: Any) -> Any:
    """Return ``base`` with ``overrides`` merged over it.

    Mappings merge key by key, recursively; null override values leave the
    base untouched. Anything else is replaced by the override. ``base`` itself
    is not modified.
    """
    if isinstance(base, Mapping) and isinstance(overrides, Mapping):
        merged = dict(base)
        for key, value in overrides.items():
            if value is None:
                continue
            if key in merged:
                merged[key] = override_yaml(merged[key], value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged
    return copy.deepcopy(overrides)