# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Core dbtasks functionality."""

from .errors import (
    DatabaseTasksError,
    DatabaseAlreadyExists,
    NoDatabaseError,
    ConnectionNotEstablished,
    AdapterNotSupported,
    CommandFailed,
)

__all__ = [
    "DatabaseTasksError",
    "DatabaseAlreadyExists",
    "NoDatabaseError",
    "ConnectionNotEstablished",
    "AdapterNotSupported",
    "CommandFailed",
]
