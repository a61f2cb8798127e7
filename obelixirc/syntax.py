"""Argument checks, line parsing and small text helpers shared by the commands."""

from __future__ import annotations

import re
import string
import time

RED = "\x1b[1;31m"
YEL = "\x1b[1;33m"
GRE = "\x1b[1;32m"
BLU = "\x1b[1;34m"
WHI = "\x1b[0;37m"

_DIGITS = frozenset(string.digits)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")

_COMMANDS = {
    "CAP": "/cap",
    "HELP": "/help",
    "INVITE": "/invite",
    "JOIN": "/join",
    "KICK": "/kick",
    "LIST": "/list",
    "MODE": "/mode",
    "MSG": "/msg",
    "PRIVMSG": "/privmsg",
    "NICK": "/nick",
    "PART": "/part",
    "QUIT": "/quit",
    "TOPIC": "/topic",
    "USER": "/user",
}


class CommandError(Exception):
    """A command was refused; the message is what the client is told."""


def check_alphanum(text: str, is_channel: bool) -> bool:
    """Return True for a 2..9 character alphanumeric name, '#'-prefixed for channels."""
    if not 2 <= len(text) <= 9:
        return False
    if is_channel:
        if not text.startswith("#"):
            return False
        body = text[1:]
    else:
        body = text
    return all(ch in _ALNUM for ch in body)


def check_numeric(text: str) -> bool:
    """Return True when text is all digits and its value does not exceed 10000."""
    if not all(ch in _DIGITS for ch in text):
        return False
    return (int(text) if text else 0) <= 10000


def check_printable(text: str) -> bool:
    """Return True for 2..9 printable ASCII characters."""
    if not 2 <= len(text) <= 9:
        return False
    return all(" " <= ch <= "~" for ch in text)


def parse_text(text: str) -> list[str]:
    """Split received text into lines on newlines; a trailing newline adds no line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_line(text: str) -> list[str]:
    """Split a line into whitespace-separated tokens, joining double-quoted runs.

    A token starting with '"' swallows following words up to one ending in '"'.
    An empty or blank line yields a single empty token.
    """
    words = iter(w for w in _WHITESPACE.split(text) if w)
    tokens: list[str] = []
    for word in words:
        if word.startswith('"'):
            joined = word[1:]
            for fragment in words:
                joined += " " + fragment
                if fragment.endswith('"'):
                    joined = joined[:-1]
                    break
            tokens.append(joined)
        else:
            tokens.append(word)
    return tokens or [""]


def to_command(token: str) -> str:
    """Map an upper-case protocol verb to its slash command; leave others as they are."""
    return _COMMANDS.get(token, token)


def local_time() -> str:
    """Return the current local time as HH:MM."""
    return time.strftime("%H:%M", time.localtime())