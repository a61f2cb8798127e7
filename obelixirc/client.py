"""Connected client state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from obelixirc.channel import Channel

PASSWORD = "password"


class Status(enum.IntEnum):
    UNAUTHENTICATED = 0
    AUTHENTICATED = 1


@dataclass(eq=False)
class Client:
    """A connection to the server; the username starts out equal to the nick."""

    nick: str
    fd: int = -1
    ip: str = ""
    password: str = PASSWORD
    user: str = field(init=False)
    current_channel: Channel | None = None
    status: Status = Status.UNAUTHENTICATED
    buffer: str = ""
    cap_negotiation_complete: bool = False

    def __post_init__(self) -> None:
        self.user = self.nick

    def append(self, data: str) -> None:
        """Add received text to the pending input buffer."""
        self.buffer += data

    def clear_buffer(self) -> None:
        self.buffer = ""