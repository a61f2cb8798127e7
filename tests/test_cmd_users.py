from __future__ import annotations

import pytest

from obelixirc import cmd_users
from obelixirc.channel import Channel
from obelixirc.client import Client
from obelixirc.syntax import WHI


class FakeHub:
    def __init__(self) -> None:
        self.clients: list[Client] = []
        self.channels: list[Channel] = []
        self.notes: list[tuple] = []
        self.sent: list[tuple[int, str]] = []
        self.disconnected: list[int] = []

    def add(self, nick: str, fd: int) -> Client:
        client = Client(nick, fd=fd)
        self.clients.append(client)
        return client

    def add_channel(self, name: str) -> Channel:
        channel = Channel(name)
        self.channels.append(channel)
        return channel

    def client_by_fd(self, fd):
        return next((c for c in self.clients if c.fd == fd), None)

    def client_by_nick(self, nick):
        return next((c for c in self.clients if c.nick == nick), None)

    def channel_by_name(self, name):
        return next((c for c in self.channels if c.name == name), None)

    def notify(self, fd, to_whom, message, header, footer, channel):
        self.notes.append((fd, to_whom, message, header, footer, channel))

    def send(self, fd, text):
        self.sent.append((fd, text))

    def disconnect(self, fd):
        self.disconnected.append(fd)

    def messages(self):
        return [note[2] for note in self.notes]


@pytest.fixture
def setup():
    hub = FakeHub()
    alice = hub.add("alice", 4)
    bob = hub.add("bob", 5)
    chan = hub.add_channel("#chan")
    chan.add_client(alice)
    chan.add_operator(alice)
    return hub, alice, bob, chan


def test_flag_action_known_and_unknown():
    assert cmd_users.flag_action("+i") == "set invite-only to channel"
    assert cmd_users.flag_action("-l") == "removed user limit to channel"
    assert cmd_users.flag_action("+z") == "unknown"


@pytest.mark.parametrize(
    "args, expected",
    [
        (["#chan", "+i"], True),
        (["#chan", "+i", "-t", "+l", "5"], True),
        (["#chan", "+k", "secret"], True),
        (["#chan"], False),
        (["chan", "+i"], False),
        (["#chan", "+z"], False),
        (["#chan", "+l", "20000"], False),
    ],
)
def test_mode_args_valid(args, expected):
    assert cmd_users.mode_args_valid(args) is expected


def test_mode_sets_flags_and_announces(setup):
    hub, alice, _, chan = setup
    cmd_users.mode(hub, ["#chan", "+i", "+t"], alice.fd)
    assert chan.mode("i") is True
    assert chan.mode("t") is True
    assert [n[2] for n in hub.notes] == [
        cmd_users.flag_action("+i"),
        cmd_users.flag_action("+t"),
    ]
    assert all(n[1] == cmd_users.SELF_AND_OTHERS for n in hub.notes)


def test_mode_key_and_limit(setup):
    hub, alice, _, chan = setup
    cmd_users.mode(hub, ["#chan", "+k", "secret", "+l", "5"], alice.fd)
    assert chan.mode("k") is True
    assert chan.mode("l") is True
    assert chan.password == "secret"
    assert chan.limit == 5
    assert hub.messages() == [
        "set mandatory channel password",
        "set user limit to channel",
    ]
    cmd_users.mode(hub, ["#chan", "-k", "-l"], alice.fd)
    assert chan.mode("k") is False
    assert chan.mode("l") is False
    assert hub.messages()[2:] == [
        "removed mandatory channel password",
        "removed user limit to channel",
    ]


def test_mode_invalid_args(setup):
    hub, alice, _, _ = setup
    cmd_users.mode(hub, ["#chan", "+z"], alice.fd)
    assert hub.messages() == ["error : check '/help mode'"]


def test_mode_unknown_channel(setup):
    hub, alice, _, _ = setup
    cmd_users.mode(hub, ["#none", "+i"], alice.fd)
    assert hub.messages() == ["can't set mode; channel doesn't exist"]


def test_mode_not_member(setup):
    hub, _, bob, chan = setup
    cmd_users.mode(hub, ["#chan", "+i"], bob.fd)
    assert hub.messages() == ["can't set mode; you haven't joined this channel"]
    assert not chan.mode("i")


def test_mode_needs_operator_when_o_set(setup):
    hub, alice, bob, chan = setup
    chan.add_client(bob)
    chan.set_mode("+o")
    cmd_users.mode(hub, ["#chan", "+i"], bob.fd)
    assert hub.messages() == ["can't set mode; you're not channel's operator"]
    assert not chan.mode("i")


def test_mode_add_operator_requires_membership(setup):
    hub, alice, bob, chan = setup
    cmd_users.mode(hub, ["#chan", "+o", "bob"], alice.fd)
    assert hub.messages() == ["can't add operator; this user didn't join to channel"]
    assert not chan.is_operator(bob)


def test_mode_add_and_remove_operator(setup):
    hub, alice, bob, chan = setup
    chan.add_client(bob)
    cmd_users.mode(hub, ["#chan", "+o", "bob"], alice.fd)
    assert chan.is_operator(bob) is True
    assert chan.mode("o") is True
    cmd_users.mode(hub, ["#chan", "-o", "bob"], alice.fd)
    assert chan.is_operator(bob) is False
    assert chan.mode("o") is True
    cmd_users.mode(hub, ["#chan", "-o"], alice.fd)
    assert chan.mode("o") is False
    assert hub.messages() == [
        "set channel's operator privilege",
        "removed channel's operator privilege",
        "removed channel's operator privilege",
    ]


def test_msg_private(setup):
    hub, alice, bob, _ = setup
    cmd_users.msg(hub, ["bob", "hello", "world"], alice.fd)
    assert len(hub.sent) == 1
    fd, text = hub.sent[0]
    assert fd == bob.fd
    assert "<alice> says privately: hello world" in text
    assert text.endswith(WHI + "\n")
    assert hub.messages() == ["  ↳ private message delivered!"]


def test_msg_channel_reaches_other_members_only(setup):
    hub, alice, bob, chan = setup
    carol = hub.add("carol", 6)
    chan.add_client(carol)
    cmd_users.msg(hub, ["#chan", "hi", "all"], alice.fd)
    assert [fd for fd, _ in hub.sent] == [carol.fd]
    assert "[#chan] <alice> says: hi all" in hub.sent[0][1]
    assert hub.messages() == ["  ↳ message delivered!"]


def test_msg_errors(setup):
    hub, alice, bob, _ = setup
    cmd_users.msg(hub, [], alice.fd)
    cmd_users.msg(hub, ["nobody", "hi"], alice.fd)
    cmd_users.msg(hub, ["#none", "hi"], alice.fd)
    cmd_users.msg(hub, ["#chan", "hi"], bob.fd)
    cmd_users.msg(hub, ["bob", "x" * 600], alice.fd)
    assert hub.messages() == [
        "error : check '/help msg'",
        "can't send msg; this user doesn't exist",
        "can't send msg; channel doesn't exist",
        "can't send msg; you haven't joined this channel",
        "can't send msg; exceed limit of 512 chars",
    ]
    assert hub.sent == []


def test_nick_change_announced(setup):
    hub, alice, _, chan = setup
    cmd_users.nick(hub, ["asterix"], alice.fd)
    assert alice.nick == "asterix"
    assert hub.notes[0][2] == "set new nick: asterix"
    assert hub.notes[1][2] == "changed the nick from alice to asterix"
    assert hub.notes[1][5] is chan


def test_nick_taken_and_invalid(setup):
    hub, alice, _, _ = setup
    cmd_users.nick(hub, ["bob"], alice.fd)
    cmd_users.nick(hub, [], alice.fd)
    assert alice.nick == "alice"
    assert hub.messages() == [
        "can't set nick; this nick was already taken",
        "Your nick is: alice",
    ]


def test_user_change_allows_extra_args(setup):
    hub, alice, _, _ = setup
    cmd_users.user(hub, ["gaul", "0", "*"], alice.fd)
    assert alice.user == "gaul"
    assert hub.messages()[0] == "set new user: gaul"


def test_user_taken_and_invalid(setup):
    hub, alice, _, _ = setup
    cmd_users.user(hub, ["bob"], alice.fd)
    cmd_users.user(hub, ["!"], alice.fd)
    assert alice.user == "alice"
    assert hub.messages() == [
        "can't set user; this user was already taken",
        "Your user is: alice",
    ]


def test_quit_with_message(setup):
    hub, alice, _, _ = setup
    cmd_users.quit(hub, ["bye"], alice.fd)
    assert hub.messages() == ["quit msg: bye"]
    assert hub.disconnected == [alice.fd]


def test_quit_without_message(setup):
    hub, alice, _, _ = setup
    cmd_users.quit(hub, [], alice.fd)
    assert hub.notes == []
    assert hub.disconnected == [alice.fd]