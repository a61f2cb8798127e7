"""Channel state: members, operators, invitees and modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_TOPIC = "Sono Pazzi Questi Romani!"
MODE_FLAGS = ("i", "t", "k", "o", "l")


def _contains(items: list[Any], item: Any) -> bool:
    return any(existing is item for existing in items)


def _without(items: list[Any], item: Any) -> list[Any]:
    return [existing for existing in items if existing is not item]


@dataclass(eq=False)
class Channel:
    """A chat channel. Members and operators are tracked by identity."""

    name: str
    topic: str = DEFAULT_TOPIC
    password: str = ""
    limit: int = 2
    clients: list[Any] = field(default_factory=list)
    operators: list[Any] = field(default_factory=list)
    modes: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(MODE_FLAGS, False))
    invitees: list[str] = field(default_factory=list)

    def mode(self, flag: str) -> bool:
        """Return whether a mode letter is set; unknown letters are unset."""
        return self.modes.get(flag, False)

    def set_mode(self, flag: str) -> None:
        """Apply a '+x' or '-x' flag; anything else is ignored."""
        sign, letter = flag[:1], flag[1:]
        if sign == "+":
            self.modes[letter] = True
        elif sign == "-":
            self.modes[letter] = False

    def add_client(self, client: Any) -> None:
        if not _contains(self.clients, client):
            self.clients.append(client)

    def remove_client(self, client: Any) -> None:
        """Remove a member, also dropping its operator privilege."""
        self.clients = _without(self.clients, client)
        self.remove_operator(client)

    def has_client(self, client: Any) -> bool:
        return _contains(self.clients, client)

    def add_operator(self, client: Any) -> None:
        if not _contains(self.operators, client):
            self.operators.append(client)

    def remove_operator(self, client: Any) -> None:
        self.operators = _without(self.operators, client)

    def is_operator(self, client: Any) -> bool:
        return _contains(self.operators, client)

    def add_invitee(self, nick: str) -> None:
        if nick not in self.invitees:
            self.invitees.append(nick)

    def remove_invitee(self, nick: str) -> None:
        self.invitees = [name for name in self.invitees if name != nick]

    def is_invitee(self, nick: str) -> bool:
        return nick in self.invitees

    def clients_summary(self) -> str:
        """Return a one-line listing of member descriptors."""
        fds = "".join(f"{client.fd} " for client in self.clients)
        return f"Clients in [{self.name}]: {fds}"