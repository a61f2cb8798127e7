"""Informational commands: channel list, user list and capability negotiation."""

from __future__ import annotations

from typing import Any

from obelixirc.channel import Channel
from obelixirc.syntax import local_time

SELF = 2

_WIDTHS = (6, 3, 4, 4, 4, 1, 1, 1, 1, 1, 20)


def _row(fields: tuple[str, ...]) -> str:
    return "  ".join(text[:width].ljust(width) for text, width in zip(fields, _WIDTHS))


def list_header() -> str:
    """Return the column header line of the channel listing."""
    return _row(("Name", "Usr", "Join", "Oper", "Actv", "i", "t", "k", "o", "l", "Topic"))


def list_row(channel: Channel, client: Any) -> str:
    """Return one listing line describing a channel as seen by a client."""
    joined = channel.has_client(client)
    current = client.current_channel
    active = joined and current is not None and channel.name == current.name

    def yes_no(flag: bool) -> str:
        return "yes" if flag else "no"

    def sign(letter: str) -> str:
        return "+" if channel.mode(letter) else "-"

    return _row(
        (
            channel.name,
            str(len(channel.clients)),
            yes_no(joined),
            yes_no(channel.is_operator(client)),
            yes_no(active),
            sign("i"),
            sign("t"),
            sign("k"),
            sign("o"),
            sign("l"),
            channel.topic,
        )
    )


def list_channels(hub: Any, args: list[str], fd: int) -> None:
    """Send the client a table of all channels."""
    if args:
        hub.notify(fd, SELF, "error : check '/help list'", 1, 1, None)
        return

    client = hub.client_by_fd(fd)
    hub.notify(fd, SELF, "List of channels", 1, 1, None)
    hub.notify(fd, SELF, list_header(), 0, 1, None)
    for channel in hub.channels:
        hub.notify(fd, SELF, list_row(channel, client), 0, 1, None)


def who(hub: Any, args: list[str], fd: int) -> None:
    """Send the client the nicks of all connected users; needs an active channel."""
    client = hub.client_by_fd(fd)
    current = client.current_channel
    if current is None or not current.name:
        hub.notify(fd, SELF, "can't verify users; you're not active in any channel ", 1, 1, None)
        return

    if len(args) > 1:
        hub.notify(fd, SELF, "error : check '/help who'", 1, 1, None)
        return

    for other in list(hub.clients):
        hub.notify(fd, SELF, other.nick, 1, 1, None)


def cap(hub: Any, args: list[str], fd: int) -> None:
    """Acknowledge capability negotiation on the server console only."""
    client = hub.client_by_fd(fd)
    print(f"{local_time()} - <{client.nick}> capability negotiation..")