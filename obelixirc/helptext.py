"""Help texts for the slash commands and the /help command itself."""

from __future__ import annotations

from typing import Any

SELF = 2
UNKNOWN = "unknown"

_DESCRIPTIONS = {
    "help": "helps understanding the commands",
    "invite": "invites a user to a channel",
    "join": "joins the channel",
    "kick": "removes a user from a channel",
    "list": "lists all available channel",
    "mode": "sets the modes for a channel",
    "msg": "send a msg to channel or to user",
    "nick": "sets the nickname",
    "part": "leaves a channel",
    "quit": "disconnects from the server",
    "topic": "sets a channel's topic",
    "user": "sets the username",
    "who": "lists all available users",
}

_USAGES = {
    "help": "/help [<command>]",
    "invite": "/invite <nickname> <channel>",
    "join": "/join <channel> [<password>]",
    "kick": "/kick <nickname> <channel>",
    "list": "/list",
    "mode": "/mode <channel> <flag> [<complement>]",
    "msg": "/msg <channel or nickname> <message>",
    "nick": "/nick <new nickname>",
    "part": "/part <channel>",
    "quit": "/quit [<quit message>]",
    "topic": "/topic <channel> [<description or message>]",
    "user": "/user <new username>",
    "who": "/who",
}

_DETAILS = {
    "help": "command alphanum",
    "invite": "nick alphanum; channel #alphanum",
    "join": "channel #alphanum; password alphanum; max 9 dig",
    "kick": "nick alphanum; channel #alphanum",
    "list": "no args",
    "mode": "channel #alphanum; flags: +/- i, t, k, o, l",
    "msg": "channel #alphanum or nick alphanum; message printable",
    "nick": "nickname alphanum; max 9 dig",
    "part": "channel #alphanum",
    "quit": "message printable",
    "topic": "channel #alphanum; message printable chars; max 15 dig",
    "user": "username alphanum; max 9 dig",
    "who": "no args",
}

OVERVIEW = (
    "use : '/help <command>'\n"
    " available commands: join, part, msg, invite, kick, \n"
    "                     list, mode, , who"
)
HELP_ERROR = "error : check '/help help'"


def describe(command: str) -> str:
    """Return what a command does, or 'unknown'."""
    return _DESCRIPTIONS.get(command, UNKNOWN)


def usage(command: str) -> str:
    """Return a command's usage line, or 'unknown'."""
    return _USAGES.get(command, UNKNOWN)


def detail(command: str) -> str:
    """Return the argument rules of a command, or 'unknown'."""
    return _DETAILS.get(command, UNKNOWN)


def cmd_help(hub: Any, args: list[str], fd: int) -> None:
    """Send the overview, or usage, description and detail of one command."""
    if not args:
        hub.notify(fd, SELF, OVERVIEW, 1, 1, None)
        return
    if len(args) > 1 or usage(args[0]) == UNKNOWN:
        hub.notify(fd, SELF, HELP_ERROR, 1, 1, None)
        return

    command = args[0]
    hub.notify(
        fd,
        SELF,
        "\n"
        f" Usage: {usage(command)}\n"
        f" Description: {describe(command)}\n"
        f" Detail: {detail(command)}",
        1,
        1,
        None,
    )