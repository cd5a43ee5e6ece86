"""Application layer: port interfaces used by the lifecycle tasks."""

from .ports import ConnectionPort

__all__ = [
    "ConnectionPort",
]
