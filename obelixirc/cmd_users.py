"""Commands that act on users and channel settings: mode, msg, nick, user and quit."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Any

from obelixirc.channel import Channel
from obelixirc.syntax import (
    WHI,
    CommandError,
    check_alphanum,
    check_numeric,
    local_time,
)

SELF = 2
OTHERS = 4
SELF_AND_OTHERS = 6

MAX_MESSAGE_CHARS = 512

_FLAG_ACTIONS = {
    "-i": "removed invite-only to channel",
    "+i": "set invite-only to channel",
    "-t": "removed restrictions of the topic",
    "+t": "set restrictions of the topic",
    "-k": "removed mandatory channel password",
    "+k": "set mandatory channel password",
    "-o": "removed channel's operator privilege",
    "+o": "set channel's operator privilege",
    "-l": "removed user limit to channel",
    "+l": "set user limit to channel",
}

_NAME_PARAM_FLAGS = frozenset({"+k", "+o", "-o"})
_PLAIN_FLAGS = frozenset({"-i", "+i", "-t", "+t", "-k", "-l"})


def _tell(hub: Any, fd: int, message: str) -> None:
    hub.notify(fd, SELF, message, 1, 1, None)


def flag_action(flag: str) -> str:
    """Return the description of what a mode flag does, or 'unknown'."""
    return _FLAG_ACTIONS.get(flag, "unknown")


def _mode_pairs(flags: list[str]) -> Iterator[tuple[str, str | None]]:
    """Yield each flag with the parameter it takes, if the next word is one."""
    pending = deque(flags)
    while pending:
        flag = pending.popleft()
        param = None
        if pending:
            following = pending[0]
            if flag in _NAME_PARAM_FLAGS and check_alphanum(following, False):
                param = pending.popleft()
            elif flag == "+l" and check_numeric(following):
                param = pending.popleft()
        yield flag, param


def mode_args_valid(args: list[str]) -> bool:
    """Return True for a channel name followed by known mode flags and their parameters."""
    if len(args) < 2 or not check_alphanum(args[0], True):
        return False
    return all(
        flag in _NAME_PARAM_FLAGS or flag == "+l" or flag in _PLAIN_FLAGS
        for flag, _ in _mode_pairs(args[1:])
    )


def _check_mode(hub: Any, args: list[str], fd: int) -> Channel:
    if not mode_args_valid(args):
        raise CommandError("error : check '/help mode'")

    channel = hub.channel_by_name(args[0])
    if channel is None:
        raise CommandError("can't set mode; channel doesn't exist")

    client = hub.client_by_fd(fd)
    if not channel.has_client(client):
        raise CommandError("can't set mode; you haven't joined this channel")
    if not channel.is_operator(client) and channel.mode("o"):
        raise CommandError("can't set mode; you're not channel's operator")

    for flag, param in _mode_pairs(args[1:]):
        if flag == "+o" and param is not None:
            if not channel.has_client(hub.client_by_nick(param)):
                raise CommandError(
                    "can't add operator; this user didn't join to channel"
                )
    return channel


def mode(hub: Any, args: list[str], fd: int) -> None:
    """Apply mode flags to a channel, announcing each to the channel."""
    try:
        channel = _check_mode(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    for flag, param in _mode_pairs(args[1:]):
        if flag in ("+o", "-o"):
            hub.notify(fd, SELF_AND_OTHERS, flag_action(flag), 1, 1, channel)
            if flag == "+o" and param is not None:
                channel.set_mode(flag)
                channel.add_operator(hub.client_by_nick(param))
            elif flag == "-o" and param is not None:
                channel.remove_operator(hub.client_by_nick(param))
            else:
                channel.set_mode(flag)
            continue

        channel.set_mode(flag)
        hub.notify(fd, SELF_AND_OTHERS, flag_action(flag), 1, 1, channel)
        if flag == "+k" and param is not None:
            channel.password = param
        elif flag == "+l" and param is not None:
            channel.limit = int(param) if param else 0


def _body(args: list[str]) -> str:
    return " ".join(args[1:])


def _send_private(hub: Any, args: list[str], fd: int) -> None:
    sender = hub.client_by_fd(fd)
    receiver = hub.client_by_nick(args[0])
    header = f"{WHI}{local_time()} - <{sender.nick}> says privately: "
    hub.send(receiver.fd, header + _body(args) + WHI + "\n")


def _send_channel(hub: Any, args: list[str], fd: int) -> None:
    channel = hub.channel_by_name(args[0])
    sender = hub.client_by_fd(fd)
    header = f"{WHI}{local_time()} - [{channel.name}] <{sender.nick}> says: "
    text = header + _body(args) + WHI + "\n"
    for other in list(hub.clients):
        if other.fd != sender.fd and channel.has_client(other):
            hub.send(other.fd, text)


def _check_msg(hub: Any, args: list[str], fd: int) -> None:
    if not args or not (check_alphanum(args[0], True) or check_alphanum(args[0], False)):
        raise CommandError("error : check '/help msg'")

    if sum(len(arg) for arg in args) > MAX_MESSAGE_CHARS:
        raise CommandError("can't send msg; exceed limit of 512 chars")

    target = args[0]
    if target.startswith("#"):
        channel = hub.channel_by_name(target)
        if channel is None:
            raise CommandError("can't send msg; channel doesn't exist")
        if not channel.has_client(hub.client_by_fd(fd)):
            raise CommandError("can't send msg; you haven't joined this channel")
    elif hub.client_by_nick(target) is None:
        raise CommandError("can't send msg; this user doesn't exist")


def msg(hub: Any, args: list[str], fd: int) -> None:
    """Send a message to a channel's other members or privately to one user."""
    try:
        _check_msg(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    if args[0].startswith("#"):
        _send_channel(hub, args, fd)
        hub.notify(fd, SELF, "  ↳ message delivered!", 0, 1, None)
    else:
        _send_private(hub, args, fd)
        hub.notify(fd, SELF, "  ↳ private message delivered!", 0, 1, None)


def _announce_rename(hub: Any, fd: int, client: Any, message: str) -> None:
    for channel in list(hub.channels):
        if channel.has_client(client):
            hub.notify(fd, OTHERS, message, 1, 1, channel)


def nick(hub: Any, args: list[str], fd: int) -> None:
    """Change the client's nick, or report the current one when no valid nick is given."""
    client = hub.client_by_fd(fd)
    if len(args) != 1 or not check_alphanum(args[0], False):
        _tell(hub, fd, f"Your nick is: {client.nick}")
        return
    if any(other.nick == args[0] for other in hub.clients):
        _tell(hub, fd, "can't set nick; this nick was already taken")
        return

    old = client.nick
    client.nick = args[0]
    _tell(hub, fd, f"set new nick: {args[0]}")
    _announce_rename(hub, fd, client, f"changed the nick from {old} to {args[0]}")


def user(hub: Any, args: list[str], fd: int) -> None:
    """Change the client's username, or report the current one when none valid is given."""
    client = hub.client_by_fd(fd)
    if not args or not check_alphanum(args[0], False):
        _tell(hub, fd, f"Your user is: {client.user}")
        return
    if any(other.user == args[0] for other in hub.clients):
        _tell(hub, fd, "can't set user; this user was already taken")
        return

    old = client.user
    client.user = args[0]
    _tell(hub, fd, f"set new user: {args[0]}")
    _announce_rename(hub, fd, client, f"changed the user from {old} to {args[0]}")


def quit(hub: Any, args: list[str], fd: int) -> None:  # noqa: A001
    """Disconnect the client, echoing a single-word quit message first."""
    if len(args) == 1:
        _tell(hub, fd, f"quit msg: {args[0]}")
    hub.disconnect(fd)