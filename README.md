# obelixirc

obelixirc is a small chat server in the style of IRC. Clients connect over TCP and send the server password. After that they can create and join channels, send messages to a channel or to a single user, and manage channel modes.

## Installation

```
pip install .
```

To install with the test dependencies (pytest):

```
pip install .[test]
```

## Running the server

```
obelixirc <port> <password>
```

The port must contain only digits and be at most five characters long. It must also be greater than 1024 and no more than 65535. If the arguments are wrong, the server prints a usage line and exits with status 1. For example:

```
obelixirc 6667 password
```

While the server runs, you can type these commands into its terminal:

- `/status` prints every connected client and every existing channel.
- `/quit` stops the server and disconnects all clients.

Ctrl+C also stops the server. On POSIX systems, Ctrl+\ (SIGQUIT) does the same.

## Connecting

Any line-based TCP client works, for example `nc localhost 6667`. The server replies `Insert password:`. Send the password either as the bare word or as `PASS <password>`. A wrong password disconnects you.

A new connection gets the nickname `User<fd>`, and its username starts out the same. Change them with `/nick` and `/user`.

## Commands

Commands start with a slash, such as `/join`. These upper-case names are also accepted: `CAP`, `HELP`, `INVITE`, `JOIN`, `KICK`, `LIST`, `MODE`, `MSG`, `PRIVMSG`, `NICK`, `PART`, `QUIT`, `TOPIC` and `USER`. `/privmsg` works the same as `/msg`.

Once you are authenticated, a line that does not start with a slash is sent as a message to your active channel. A double-quoted run of words counts as a single argument.

| Command | Usage |
|---|---|
| help | `/help [<command>]` |
| invite | `/invite <nickname> <channel>` |
| join | `/join <channel> [<password>]` |
| kick | `/kick <nickname> <channel>` |
| list | `/list` |
| mode | `/mode <channel> <flag> [<complement>]` |
| msg | `/msg <channel or nickname> <message>` |
| nick | `/nick <new nickname>` |
| part | `/part <channel>` |
| quit | `/quit [<quit message>]` |
| topic | `/topic <channel> [<description or message>]` |
| user | `/user <new username>` |
| who | `/who` |

`/cap` is also accepted. It only logs the capability negotiation on the server console.

Joining a channel that does not exist creates it and makes you its operator. If you give a password when creating a channel, the channel gets that password and mode `k`. A new channel has a default topic and a user limit of 2. The limit only applies while mode `l` is set. The channel you joined last becomes your active channel.

`/who` lists the nicknames of every connected user. It only works while you have an active channel.

A message may not exceed 512 characters in total.

### Naming rules

- Nicknames, usernames and channel passwords are alphanumeric and 2 to 9 characters long.
- Channel names start with `#`, followed by alphanumeric characters. They are also 2 to 9 characters long in total.

### Channel modes

Set modes with `/mode <channel> +x` and remove them with `-x`:

- `i`: invite only. Only nicknames on the channel's guest list (see `/invite`) may join.
- `t`: restricted topic. Only operators may change the topic.
- `k`: channel password. `+k <password>` also sets the password.
- `o`: operator privilege. While it is set, only operators may invite, kick, change modes or set the topic. `+o <nick>` and `-o <nick>` grant or remove operator status for a member.
- `l`: user limit. `+l <number>` also sets the limit, which can be at most 10000.

## Using it as a library

The protocol logic does not need sockets. `obelixirc.hub.Hub(password, send, close)` takes the server password, a `send(fd, text)` callable and a `close(fd)` callable. Use it like this:

- Register a connection with `Hub.add_client(fd, ip)`.
- Feed the text it sends with `Hub.receive(fd, data)`. Empty data means the peer went away.
- `Hub.status()` returns the same report the `/status` console command prints.

`obelixirc.server.Server(port, password)` is the TCP front end used by the `obelixirc` command. It provides `serve_forever()` and `stop()`.

## Limitations

- All state is kept in memory. Nothing is saved when the server stops.
- Replies are plain human-readable text lines, not IRC numeric replies, so full IRC clients may not show them as expected.
- There is no TLS and no server-to-server linking.