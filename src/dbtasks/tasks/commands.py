"""Invocation of external database command-line tools."""

from __future__ import annotations

import contextlib
import logging
import shlex
import subprocess
from typing import List, Optional, Sequence, Union

from dbtasks.core.errors import CommandFailed

logger = logging.getLogger(__name__)

ExtraFlags = Union[str, Sequence[str], None]


def normalize_flags(extra_flags: ExtraFlags) -> List[str]:
    """Turn a flag string, a flag list, or None into an argument list.

    A string is split with shell quoting rules, so ``"-bail -echo"`` gives
    two arguments. List items are passed through as one argument each.
    """
    if not extra_flags:
        return []
    if isinstance(extra_flags, str):
        return shlex.split(extra_flags)
    return [str(flag) for flag in extra_flags]


def run_cmd(
    cmd: str,
    args: Sequence[str],
    stdout_path: Optional[str] = None,
    stdin_path: Optional[str] = None,
) -> None:
    """Run *cmd* with *args*, optionally redirecting stdout/stdin to files.

    Standard error is left attached to the caller's terminal. Errors
    opening the redirect files propagate unchanged.

    Raises:
        CommandFailed: If the command cannot be started or exits non-zero.
    """
    argv = [cmd, *args]
    logger.debug("Running %s", " ".join(argv))

    with contextlib.ExitStack() as stack:
        stdin_file = stack.enter_context(open(stdin_path, "r")) if stdin_path else None
        stdout_file = stack.enter_context(open(stdout_path, "w")) if stdout_path else None
        try:
            result = subprocess.run(argv, stdout=stdout_file, stdin=stdin_file)
        except OSError as exc:
            logger.error("Could not start %s: %s", cmd, exc)
            raise CommandFailed(cmd, args) from exc

    if result.returncode != 0:
        logger.error("%s exited with status %d", cmd, result.returncode)
        raise CommandFailed(cmd, args, result.returncode)
