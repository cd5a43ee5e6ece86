# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Exceptions raised by database lifecycle tasks."""

from typing import Optional, Sequence


class DatabaseTasksError(Exception):
    """Base exception for dbtasks."""


class DatabaseAlreadyExists(DatabaseTasksError):  # noqa: N818
    """Raised when creating a database whose file is already on disk."""


class NoDatabaseError(DatabaseTasksError):
    """Raised when dropping a database whose file does not exist."""


class ConnectionNotEstablished(DatabaseTasksError):  # noqa: N818
    """Raised when a connection is requested before it was established."""


class AdapterNotSupported(DatabaseTasksError):  # noqa: N818
    """Raised when no task class is registered for a database adapter."""


class CommandFailed(DatabaseTasksError):  # noqa: N818
    """Raised when an external database command exits unsuccessfully.

    Attributes:
        cmd: Executable name that was invoked.
        args: Arguments passed to the executable.
        returncode: Exit status, or None if the process never started.
    """

    def __init__(
        self,
        cmd: str,
        args: Sequence[str],
        returncode: Optional[int] = None,
    ):
        self.cmd = cmd
        self.cmd_args = list(args)
        self.returncode = returncode
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        msg = "failed to execute:\n"
        msg += f"{self.cmd} {' '.join(self.cmd_args)}\n\n"
        msg += (
            "Please check the output above for any errors and make sure that "
            f"`{self.cmd}` is installed in your PATH and has proper permissions.\n\n"
        )
        return msg
