"""Port interfaces (Protocol classes) for dependency inversion.

Ports define the contracts that connection implementations must satisfy.
"""

from .connection_port import ConnectionPort

__all__ = [
    "ConnectionPort",
]
