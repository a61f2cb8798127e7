import pytest

from obelixirc.channel import Channel
from obelixirc.client import Client
from obelixirc.cmd_info import cap, list_channels, list_header, list_row, who


class FakeHub:
    def __init__(self):
        self.clients = []
        self.channels = []
        self.notes = []

    def add(self, fd, nick):
        client = Client(nick, fd=fd)
        self.clients.append(client)
        return client

    def client_by_fd(self, fd):
        return next((c for c in self.clients if c.fd == fd), None)

    def notify(self, fd, to_whom, message, header, footer, channel):
        self.notes.append((fd, to_whom, message, header))
        return False


@pytest.fixture
def hub():
    h = FakeHub()
    h.add(4, "Asterix")
    h.add(5, "Obelix")
    return h


def test_header_pinned():
    assert list_header() == (
        "Name    Usr  Join  Oper  Actv  i  t  k  o  l  Topic               "
    )


def test_row_has_header_width():
    client = Client("Asterix", fd=4)
    channel = Channel("#gaul")
    assert len(list_row(channel, client)) == len(list_header())


def test_row_for_active_operator():
    client = Client("Asterix", fd=4)
    channel = Channel("#gaul")
    channel.add_client(client)
    channel.add_operator(client)
    channel.set_mode("+k")
    client.current_channel = channel
    row = list_row(channel, client)
    assert row[0:6] == "#gaul "
    assert row[8:11] == "1  "
    assert row[13:17] == "yes "
    assert row[19:23] == "yes "
    assert row[25:29] == "yes "
    assert row[37] == "+"
    assert row[31] == "-"
    assert row[46:] == "Sono Pazzi Questi Romani!"[:20]


def test_row_for_outsider():
    client = Client("Obelix", fd=5)
    channel = Channel("#gaul")
    row = list_row(channel, client)
    assert row[8:11] == "0  "
    assert row[13:17] == "no  "
    assert row[25:29] == "no  "


def test_row_truncates_long_name():
    client = Client("Obelix", fd=5)
    channel = Channel("#armorica")
    assert list_row(channel, client).startswith("#armor  ")


def test_list_channels_sends_header_and_rows(hub):
    hub.channels = [Channel("#gaul"), Channel("#rome")]
    list_channels(hub, [], 4)
    messages = [m for (_, _, m, _) in hub.notes]
    assert messages[0] == "List of channels"
    assert messages[1] == list_header()
    assert messages[2:] == [
        list_row(ch, hub.client_by_fd(4)) for ch in hub.channels
    ]
    assert [h for (_, _, _, h) in hub.notes] == [1, 0, 0, 0]


def test_list_channels_rejects_args(hub):
    list_channels(hub, ["x"], 4)
    assert [m for (_, _, m, _) in hub.notes] == ["error : check '/help list'"]


def test_who_needs_active_channel(hub):
    who(hub, [], 4)
    assert [m for (_, _, m, _) in hub.notes] == [
        "can't verify users; you're not active in any channel "
    ]


def test_who_lists_all_nicks(hub):
    hub.client_by_fd(4).current_channel = Channel("#gaul")
    who(hub, [], 4)
    assert [m for (_, _, m, _) in hub.notes] == ["Asterix", "Obelix"]


def test_who_rejects_many_args(hub):
    hub.client_by_fd(4).current_channel = Channel("#gaul")
    who(hub, ["a", "b"], 4)
    assert [m for (_, _, m, _) in hub.notes] == ["error : check '/help who'"]


def test_cap_logs_to_console(hub, capsys):
    cap(hub, ["LS"], 5)
    out = capsys.readouterr().out
    assert out.endswith("<Obelix> capability negotiation..\n")
    assert hub.notes == []