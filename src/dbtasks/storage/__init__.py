# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Connection layer: SQLite connections and the handler that owns them."""

from .database import SQLiteConnection
from .connection_handler import ConnectionHandler

__all__ = [
    "SQLiteConnection",
    "ConnectionHandler",
]
