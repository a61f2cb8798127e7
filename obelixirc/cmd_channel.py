"""Channel membership commands: join, part, invite, kick and topic."""

from __future__ import annotations

from typing import Any

from obelixirc.channel import Channel
from obelixirc.syntax import CommandError, check_alphanum, check_printable

SELF = 2
OTHERS = 4


def _tell(hub: Any, fd: int, message: str) -> None:
    hub.notify(fd, SELF, message, 1, 1, None)


def _join_args_valid(args: list[str]) -> bool:
    if not 1 <= len(args) <= 2:
        return False
    if not check_alphanum(args[0], True):
        return False
    return len(args) == 1 or check_alphanum(args[1], False)


def _check_join(hub: Any, args: list[str], fd: int) -> Channel | None:
    if not _join_args_valid(args):
        raise CommandError("error : check '/help join'")

    channel = hub.channel_by_name(args[0])
    client = hub.client_by_fd(fd)
    if channel is None:
        return None

    if channel.has_client(client):
        client.current_channel = channel
        raise CommandError("is active on this channel")

    if (
        channel.password
        and (len(args) != 2 or channel.password != args[1])
        and channel.mode("k")
    ):
        raise CommandError("can't join this channel; password incorrect")

    if len(args) == 2 and not channel.mode("k"):
        raise CommandError("can't join this channel; password not necessary")

    if not channel.is_invitee(client.nick) and channel.mode("i"):
        raise CommandError("can't join this channel; you're not in guest list")

    if len(channel.clients) >= channel.limit and channel.mode("l"):
        raise CommandError("can't join this channel; channel full")

    return channel


def join(hub: Any, args: list[str], fd: int) -> None:
    """Join a channel, creating it (and becoming its operator) if it does not exist."""
    try:
        channel = _check_join(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    client = hub.client_by_fd(fd)
    is_creator = False

    if channel is None:
        hub.create_channel(args[0])
        is_creator = True
        channel = hub.channel_by_name(args[0])
        if len(args) == 2:
            channel.password = args[1]
            channel.set_mode("+k")
        _tell(hub, fd, f"created {channel.name}")

    channel.add_client(client)
    _tell(hub, fd, f"joined to {channel.name}")
    hub.notify(fd, OTHERS, "joined to channel", 1, 1, channel)

    if is_creator:
        channel.add_operator(client)
        _tell(hub, fd, f"named operator of {channel.name}")

    client.current_channel = channel
    _tell(hub, fd, f"is now active on {channel.name}")


def _check_part(hub: Any, args: list[str], fd: int) -> Channel:
    if len(args) != 1 or not check_alphanum(args[0], True):
        raise CommandError("error : check '/help part'")

    client = hub.client_by_fd(fd)
    channel = hub.channel_by_name(args[0])
    if channel is None:
        raise CommandError("can't leave; channel doesn't exist")
    if not channel.has_client(client):
        raise CommandError("can't leave; you haven't joined this channel")
    return channel


def part(hub: Any, args: list[str], fd: int) -> None:
    """Leave a channel; it stops being the active one if it was."""
    try:
        channel = _check_part(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    client = hub.client_by_fd(fd)
    current = client.current_channel
    if current is not None and current.name == channel.name:
        client.current_channel = None
    channel.remove_client(client)

    _tell(hub, fd, "left the channel")
    hub.notify(fd, OTHERS, "left the channel", 1, 1, channel)


def _nick_and_channel_valid(args: list[str]) -> bool:
    return (
        len(args) == 2
        and check_alphanum(args[0], False)
        and check_alphanum(args[1], True)
    )


def _check_invite(hub: Any, args: list[str], fd: int) -> tuple[Any, Channel]:
    if not _nick_and_channel_valid(args):
        raise CommandError("error : check '/help invite'")

    invitor = hub.client_by_fd(fd)
    invitee = hub.client_by_nick(args[0])
    channel = hub.channel_by_name(args[1])

    if channel is None:
        raise CommandError("can't invite; channel doesn't exist")
    if not channel.has_client(invitor):
        raise CommandError("can't invite; you haven't joined this channel")
    if not channel.is_operator(invitor) and channel.mode("o"):
        raise CommandError("can't invite; you're not channel's operator")
    if invitee is None:
        raise CommandError("can't invite; this user doesn't exist")
    return invitee, channel


def invite(hub: Any, args: list[str], fd: int) -> None:
    """Put a nick on a channel's guest list and tell the invited user."""
    try:
        invitee, channel = _check_invite(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    channel.add_invitee(args[0])
    _tell(hub, fd, f"invited {args[0]} to the channel")
    hub.notify(fd, OTHERS, f"invited {args[0]} to the channel", 1, 1, channel)

    note = hub.forge_note(fd, f"invited you to join {channel.name}", 1, 1, channel)
    hub.send(invitee.fd, note)


def _check_kick(hub: Any, args: list[str], fd: int) -> tuple[Any, Channel]:
    if not _nick_and_channel_valid(args):
        raise CommandError("error : check '/help kick'")

    kicker = hub.client_by_fd(fd)
    kicked = hub.client_by_nick(args[0])
    channel = hub.channel_by_name(args[1])

    if channel is None:
        raise CommandError("can't kick; channel doesn't exist")
    if not channel.has_client(kicker):
        raise CommandError("can't kick; you haven't joined this channel")
    if not channel.is_operator(kicker) and channel.mode("o"):
        raise CommandError("can't kick; you're not channel's operator")
    if kicked is None:
        raise CommandError("can't kick; this user doesn't exist")
    if not channel.has_client(kicked):
        raise CommandError("can't kick; this user does not joined to channel")
    return kicked, channel


def kick(hub: Any, args: list[str], fd: int) -> None:
    """Remove a member from a channel and tell them."""
    try:
        kicked, channel = _check_kick(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    channel.remove_client(kicked)

    _tell(hub, fd, f"kicked {kicked.nick} from this channel")
    hub.notify(fd, OTHERS, f"kicked {kicked.nick}", 1, 1, channel)

    note = hub.forge_note(fd, f"kicked you from {channel.name}", 1, 1, channel)
    hub.send(kicked.fd, note)


def _topic_args_valid(args: list[str]) -> bool:
    if len(args) == 1:
        return check_alphanum(args[0], True)
    if len(args) == 2:
        return check_printable(args[0])
    return False


def _check_topic(hub: Any, args: list[str], fd: int) -> Channel:
    if not _topic_args_valid(args):
        raise CommandError("error : check '/help topic'")

    client = hub.client_by_fd(fd)
    channel = hub.channel_by_name(args[0])

    if len(args) == 1:
        if channel is None:
            raise CommandError("can't see topic; channel doesn't exist")
        if not channel.has_client(client):
            raise CommandError("can't see topic; you haven't joined this channel")
        return channel

    if channel is None:
        raise CommandError("can't set topic; channel doesn't exist")
    if not channel.has_client(client):
        raise CommandError("can't set topic; you haven't joined this channel")
    if not channel.is_operator(client) and channel.mode("t"):
        raise CommandError("can't set topic; the topic can't be changed")
    if not channel.is_operator(client) and channel.mode("o"):
        raise CommandError("can't set topic; you're not channel's operator")
    return channel


def topic(hub: Any, args: list[str], fd: int) -> None:
    """Show a channel's topic, or set it when a new one is given."""
    try:
        channel = _check_topic(hub, args, fd)
    except CommandError as exc:
        _tell(hub, fd, str(exc))
        return

    if len(args) == 1:
        _tell(hub, fd, f"channel's topic: {channel.topic}")
    else:
        channel.topic = args[1]
        _tell(hub, fd, "set new topic to this channel")
        hub.notify(fd, OTHERS, "set new topic to this channel", 1, 1, channel)