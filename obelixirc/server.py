"""TCP front end and command-line entry point."""

from __future__ import annotations

import selectors
import signal
import socket
import sys

from obelixirc.hub import Hub
from obelixirc.syntax import GRE, RED, WHI, YEL, local_time

_USAGE = "USAGE: ./ircserv <port number> <password>"
_RECV_SIZE = 1023


class Server:
    """Listens on a TCP port and feeds client traffic to a Hub."""

    def __init__(self, port: int, password: str) -> None:
        self._selector = selectors.DefaultSelector()
        self._sockets: dict[int, socket.socket] = {}
        self._running = False
        self.hub = Hub(password, self._send, self._close)

        print(f"{local_time()} - Starting the Server.. ")
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.setblocking(False)
            listener.bind(("", port))
            listener.listen(socket.SOMAXCONN)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        self.hub.server_fd = listener.fileno()
        self.address = listener.getsockname()
        self._selector.register(listener, selectors.EVENT_READ, "listen")
        self._stdin = self._register_stdin()

    def _register_stdin(self):
        try:
            stream = sys.stdin
            if stream is None or stream.closed:
                return None
            self._selector.register(stream.fileno(), selectors.EVENT_READ, "stdin")
            return stream
        except (OSError, ValueError, AttributeError):
            return None

    def _send(self, fd: int, text: str) -> None:
        sock = self._sockets.get(fd)
        if sock is None:
            return
        try:
            sock.sendall(text.encode("utf-8"))
        except OSError:
            pass

    def _close(self, fd: int) -> None:
        sock = self._sockets.pop(fd, None)
        if sock is None:
            return
        try:
            self._selector.unregister(sock)
        except (KeyError, ValueError):
            pass
        sock.close()

    def _accept(self) -> None:
        try:
            conn, (ip, _port) = self._listener.accept()
        except OSError:
            print(f"{local_time()} - <User-1> fail acceptance")
            return
        conn.setblocking(False)
        fd = conn.fileno()
        self._sockets[fd] = conn
        self._selector.register(conn, selectors.EVENT_READ, "client")
        self.hub.add_client(fd, ip)

    def _read_client(self, fd: int) -> None:
        sock = self._sockets.get(fd)
        if sock is None:
            return
        try:
            data = sock.recv(_RECV_SIZE)
        except BlockingIOError:
            return
        except OSError:
            data = b""
        self.hub.receive(fd, data.decode("utf-8", errors="replace"))

    def _read_stdin(self) -> None:
        line = self._stdin.readline()
        if not line:
            self._selector.unregister(self._stdin.fileno())
            self._stdin = None
            return
        command = line.rstrip("\n")
        if command == "/quit":
            self.stop()
        elif command == "/status":
            print(self.hub.status(), end="")
        else:
            print(f"{local_time()} - <Serv{self.hub.server_fd}> {command}: command not found")

    def serve_forever(self) -> None:
        """Handle events until stop() is called, then close every connection."""
        print(f"{local_time()} - {GRE}<Serv{self.hub.server_fd}> connected{WHI}")
        self._running = True
        try:
            while self._running:
                for key, _ in self._selector.select(timeout=0.2):
                    if not self._running:
                        break
                    if key.data == "listen":
                        self._accept()
                    elif key.data == "stdin":
                        self._read_stdin()
                    else:
                        self._read_client(key.fd)
        finally:
            self._shutdown()

    def stop(self) -> None:
        self._running = False

    def _shutdown(self) -> None:
        self.hub.close_all()
        if self.hub.server_fd != -1:
            print(f"{RED}{local_time()} - <Serv{self.hub.server_fd}> disconnected{WHI}")
            self._selector.unregister(self._listener)
            self._listener.close()
            self.hub.server_fd = -1
        self._selector.close()


def validate_args(argv: list[str]) -> tuple[int, str]:
    """Check '<port> <password>' arguments; raise ValueError with the usage text."""
    if len(argv) != 2:
        raise ValueError(_USAGE)
    port, password = argv
    if not port or len(port) > 5:
        raise ValueError(f"{_USAGE}; Port max 5 digits.")
    if not port.isascii() or not port.isdigit():
        raise ValueError(f"{_USAGE}; Port only digits.")
    number = int(port)
    if number <= 1024 or number > 65535:
        raise ValueError(f"{_USAGE}; Port from 1024 to 65535>")
    return number, password


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        port, password = validate_args(args)
    except ValueError as exc:
        print(exc)
        return 1

    try:
        server = Server(port, password)
    except OSError as exc:
        print(f"{local_time()} - failed to bind serv socket: {exc}", file=sys.stderr)
        return 0

    def on_signal(_signum, _frame):
        print(f"{YEL} >> Interrupt Signal{WHI}")
        server.stop()

    signal.signal(signal.SIGINT, on_signal)
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, on_signal)
    server.serve_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())