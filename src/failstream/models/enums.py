"""Enumerations for failstream.

This module defines the enum types shared by streams and teardown hooks.
"""

from enum import Enum


class Role(str, Enum):
    """Side of a connection performing a teardown.

    Protocols such as WebSocket sequence their closing handshake differently
    depending on whether the local end initiated the connection.

    Example:
        >>> Role.CLIENT.peer()
        <Role.SERVER: 'server'>
    """

    CLIENT = "client"
    SERVER = "server"

    def peer(self) -> "Role":
        """Return the role of the other end of the connection."""
        return Role.SERVER if self is Role.CLIENT else Role.CLIENT
