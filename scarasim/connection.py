"""TCP connection to the SCARA robot simulator."""

from __future__ import annotations

import socket
import time
from dataclasses import dataclass
from types import TracebackType

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 1270
SEND_DELAY = 0.2


def _code(exc: BaseException) -> int:
    errno = getattr(exc, "errno", None)
    return errno if isinstance(errno, int) else 0


class SocketError(Exception):
    """A network operation failed."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"{message} (code {code})")
        self.code = code
        self.message = message


@dataclass(frozen=True)
class SocketAddress:
    """A host name and port pair."""

    host: str
    port: int

    def resolve(self) -> tuple[str, int]:
        """Return the resolved IPv4 address and the port."""
        try:
            ip = socket.gethostbyname(self.host)
        except OSError as exc:
            raise SocketError(_code(exc), "Failed to resolve host") from exc
        return ip, self.port

    @property
    def ip(self) -> str:
        return self.resolve()[0]

    def name(self) -> str | None:
        """Return the official host name, or None if it cannot be looked up."""
        try:
            return socket.gethostbyname_ex(self.ip)[0]
        except (OSError, SocketError):
            return None

    def aliases(self) -> list[str]:
        """Return the alias names of the host; empty if it cannot be looked up."""
        try:
            return list(socket.gethostbyname_ex(self.ip)[1])
        except (OSError, SocketError):
            return []


class RobotClient:
    """A stream connection that sends commands to the simulator.

    After every send the client pauses for ``send_delay`` seconds, which may be
    changed on the instance.
    """

    def __init__(
        self,
        sock: socket.socket | None = None,
        address: SocketAddress | None = None,
    ) -> None:
        self._sock = sock
        self.address = address
        self.send_delay = SEND_DELAY

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self, host: str | None = None, port: int | None = None) -> None:
        """Connect to host and port, or to the stored address when no host is given."""
        if host is None:
            if self.address is None:
                raise SocketError(0, "Cannot connect to NULL host")
            host = self.address.name() or self.address.host
            port = self.address.port
        elif port is None:
            raise ValueError("a port is required when a host is given")

        try:
            ip = socket.gethostbyname(host)
        except OSError as exc:
            raise SocketError(_code(exc), "Failed to resolve host") from exc

        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        except OSError as exc:
            raise SocketError(_code(exc), "Failed to create client socket") from exc

        try:
            sock.connect((ip, port))
        except OSError as exc:
            sock.close()
            raise SocketError(_code(exc), "Connect failed") from exc

        self.close()
        self._sock = sock

    def send(self, data: str | bytes) -> int:
        """Send all of data, pause for the send delay, and return the byte count."""
        if self._sock is None:
            raise SocketError(0, "Not connected: send()")
        payload = data.encode("ascii") if isinstance(data, str) else bytes(data)
        try:
            self._sock.sendall(payload)
        except OSError as exc:
            raise SocketError(_code(exc), "Network failure: send()") from exc
        if self.send_delay > 0:
            time.sleep(self.send_delay)
        return len(payload)

    def read(self, size: int) -> bytes:
        """Read at most size bytes; an empty result means the peer closed."""
        if self._sock is None:
            raise SocketError(0, "Not connected: read()")
        try:
            return self._sock.recv(size)
        except OSError as exc:
            raise SocketError(_code(exc), "Network failure: read()") from exc

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> RobotClient:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()


class ServerSocket:
    """A listening socket that hands out RobotClient connections."""

    def __init__(self, port: int = 80, queue: int = 10) -> None:
        self.port = port
        self.queue = queue
        self.address: SocketAddress | None = None
        self._sock: socket.socket | None = None

    @property
    def bound(self) -> bool:
        return self._sock is not None

    def bind(self, address: SocketAddress | None) -> RobotClient:
        """Rebind to address and wait for the first client."""
        self.close()
        self.address = address
        return self.accept()

    def accept(self) -> RobotClient:
        """Listen and return the next accepted client connection."""
        if self._sock is None:
            if self.address is not None:
                host, port = self.address.resolve()
            else:
                host, port = "", self.port
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
            try:
                sock.bind((host, port))
            except OSError as exc:
                sock.close()
                raise SocketError(_code(exc), "Failed to bind: accept()") from exc
            self._sock = sock

        try:
            self._sock.listen(self.queue)
        except OSError as exc:
            raise SocketError(_code(exc), "Failed to listen: accept()") from exc

        try:
            conn, peer = self._sock.accept()
        except OSError as exc:
            raise SocketError(_code(exc), "Invalid client socket: accept()") from exc

        return RobotClient(conn, SocketAddress(peer[0], peer[1]))

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        self.address = None


def connect_to_simulator(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> RobotClient:
    """Open a connection to the simulator running in remote mode."""
    client = RobotClient()
    client.connect(host, port)
    return client