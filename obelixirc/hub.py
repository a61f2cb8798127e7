"""Connection-independent server core: clients, channels and command dispatch."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from obelixirc import cmd_channel, cmd_info, cmd_users, helptext
from obelixirc.channel import Channel
from obelixirc.client import Client, Status
from obelixirc.syntax import (
    BLU,
    GRE,
    RED,
    WHI,
    local_time,
    parse_line,
    parse_text,
    to_command,
)

SendFunc = Callable[[int, str], None]
CloseFunc = Callable[[int], None]

_COMMANDS: dict[str, Callable[[Any, list[str], int], None]] = {
    "/cap": cmd_info.cap,
    "/help": helptext.cmd_help,
    "/invite": cmd_channel.invite,
    "/join": cmd_channel.join,
    "/kick": cmd_channel.kick,
    "/list": cmd_info.list_channels,
    "/mode": cmd_users.mode,
    "/msg": cmd_users.msg,
    "/privmsg": cmd_users.msg,
    "/nick": cmd_users.nick,
    "/part": cmd_channel.part,
    "/quit": cmd_users.quit,
    "/topic": cmd_channel.topic,
    "/user": cmd_users.user,
    "/who": cmd_info.who,
}


class Hub:
    """Holds all server state and reacts to text received from clients.

    Output goes through the ``send`` callable and connections are closed
    through ``close``, so the hub itself never touches a socket.
    """

    def __init__(self, password: str, send: SendFunc, close: CloseFunc) -> None:
        self.password = password
        self._send = send
        self._close = close
        self.server_fd = -1
        self.clients: list[Client] = []
        self.channels: list[Channel] = []

    def send(self, fd: int, text: str) -> None:
        self._send(fd, text)

    def add_client(self, fd: int, ip: str) -> Client:
        """Register a new connection and ask it for the password."""
        client = Client(f"User{fd}", fd=fd, ip=ip)
        self.clients.append(client)
        print(f"{local_time()} - <User{fd}> requested connection..")
        self.send(fd, "Insert password: \n")
        return client

    def client_by_fd(self, fd: int) -> Client | None:
        return next((c for c in self.clients if c.fd == fd), None)

    def client_by_nick(self, nick: str) -> Client | None:
        return next((c for c in self.clients if c.nick == nick), None)

    def channel_by_name(self, name: str) -> Channel | None:
        return next((ch for ch in self.channels if ch.name == name), None)

    def create_channel(self, name: str) -> Channel:
        channel = Channel(name)
        self.channels.append(channel)
        return channel

    def forge_note(
        self,
        fd: int,
        message: str,
        header: int = 1,
        footer: int = 1,
        channel: Channel | None = None,
    ) -> str:
        """Build a notice, optionally prefixed with time, channel and sender."""
        note = WHI
        if header == 1:
            note += f"{local_time()} - "
            if channel is not None:
                note += f"[{channel.name}] "
            if fd == self.server_fd:
                note += f"<Serv{self.server_fd}> "
            else:
                client = self.client_by_fd(fd)
                note += f"<{client.nick if client else ''}> "
        note += message + WHI
        note += "\r\n" if footer == 1 else " "
        return note

    def notify(
        self,
        fd: int,
        to_whom: int,
        message: str,
        header: int = 1,
        footer: int = 1,
        channel: Channel | None = None,
    ) -> bool:
        """Deliver a notice: bit 1 to the console, 2 to the sender, 4 to channel peers.

        Always returns False, so a failed check can report and refuse in one step.
        """
        note = self.forge_note(fd, message, header, footer, channel)
        if to_whom % 2 == 1:
            print(note, end="")
        if to_whom in (2, 3, 6, 7):
            self.send(fd, note)
        if to_whom >= 4 and channel is not None:
            for other in list(self.clients):
                if channel.has_client(other) and other.fd != fd:
                    self.send(other.fd, note)
        return False

    def receive(self, fd: int, data: str) -> None:
        """Handle text read from a client; empty data means the peer went away."""
        client = self.client_by_fd(fd)
        if client is None:
            return
        if not data:
            print(f"{local_time()} - <User{fd}> fail receive data")
            self.disconnect(fd)
            return
        client.append(data)
        if "\r" not in client.buffer and "\n" not in client.buffer:
            return
        self.drive_actions(client.buffer, fd)
        if self.client_by_fd(fd) is not None:
            client.clear_buffer()

    def drive_actions(self, text: str, fd: int) -> None:
        """Run every complete line of text as a command or a message."""
        for line in parse_text(text):
            client = self.client_by_fd(fd)
            if client is None:
                break
            tokens = parse_line(line)
            tokens[0] = to_command(tokens[0])
            if tokens[0] == "/cap":
                self.exec_cmd(tokens, fd)
            elif client.status is Status.UNAUTHENTICATED:
                self.authenticate(tokens, fd)
            elif tokens[0].startswith("/"):
                self.exec_cmd(tokens, fd)
            else:
                self.direct_msg(tokens, fd)

    def authenticate(self, tokens: list[str], fd: int) -> None:
        """Accept 'PASS <pw>' or a bare password; a wrong one disconnects."""
        password = ""
        if len(tokens) == 2 and tokens[0] == "PASS":
            password = tokens[1]
        elif len(tokens) == 1:
            password = tokens[0]

        if password != self.password:
            note = f"{local_time()} - <User{fd}> set wrong password\n"
            print(note, end="")
            self.send(fd, note)
            self.disconnect(fd)
            return

        note = f"{GRE}{local_time()} - <User{fd}> connected{WHI}\n"
        print(note, end="")
        self.send(fd, note)
        client = self.client_by_fd(fd)
        if client is not None:
            client.status = Status.AUTHENTICATED

    def exec_cmd(self, tokens: list[str], fd: int) -> None:
        command, args = tokens[0], tokens[1:]
        handler = _COMMANDS.get(command)
        if handler is not None:
            handler(self, args, fd)
            return
        client = self.client_by_fd(fd)
        nick = client.nick if client else ""
        self.send(fd, f"{local_time()} - <{nick}> {command}: command not found\n")

    def direct_msg(self, tokens: list[str], fd: int) -> None:
        """Send plain text to the client's active channel."""
        client = self.client_by_fd(fd)
        current = client.current_channel if client else None
        if current is None or not current.name:
            self.notify(fd, 2, "can't send msg; you're not active in any channel ")
            return
        self.exec_cmd(["/msg", current.name, *tokens], fd)

    def disconnect(self, fd: int) -> None:
        """Say goodbye, close the connection and forget the client."""
        note = f"{RED}{local_time()} - <User{fd}> disconnected{WHI}\n"
        print(note, end="")
        self.send(fd, note)
        self._close(fd)
        client = self.client_by_fd(fd)
        if client is None:
            return
        for channel in self.channels:
            channel.remove_client(client)
        self.clients = [c for c in self.clients if c is not client]

    def close_all(self) -> None:
        """Disconnect every client."""
        for client in list(self.clients):
            note = f"{RED}{local_time()} - <User{client.fd}> disconnected{WHI}\n"
            print(note, end="")
            self.send(client.fd, note)
            self._close(client.fd)
        self.clients.clear()

    def status(self) -> str:
        """Return a report of all clients and channels."""
        parts = ["\n", f"{BLU}Qty clients = {len(self.clients)}{WHI}\n"]
        for client in self.clients:
            current = client.current_channel.name if client.current_channel else "N/A"
            parts.append(
                f"FD = {client.fd}\n"
                f"IP ADD = {client.ip}\n"
                f"USRNAME = {client.user}\n"
                f"NICK = {client.nick}\n"
                f"PWD = {client.password}\n"
                f"CURRENT CHANNEL = {current}\n"
                f"STATUS = {int(client.status)}\n\n"
            )
        parts.append(f"{BLU}Qty channels = {len(self.channels)}{WHI}\n")
        for channel in self.channels:
            parts.append(
                f"NAME = {channel.name}\n"
                f"TOPIC = {channel.topic}\n"
                f"PWD = {channel.password}\n"
                f"LIMIT = {channel.limit}\n"
                f"SIZE (#CLIENTS) = {len(channel.clients)}\n"
                f"{channel.clients_summary()}\n\n"
            )
        return "".join(parts)