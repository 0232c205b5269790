import socket
import threading
import time

import pytest

from scarasim.connection import (
    RobotClient,
    ServerSocket,
    SocketAddress,
    SocketError,
    connect_to_simulator,
)


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _client(sock=None, address=None):
    client = RobotClient(sock, address)
    client.send_delay = 0
    return client


def test_socket_error_carries_code_and_message():
    err = SocketError(7, "Network failure")
    assert err.code == 7
    assert err.message == "Network failure"
    assert "Network failure" in str(err)


def test_address_resolves_numeric_host():
    assert SocketAddress("127.0.0.1", 1270).resolve() == ("127.0.0.1", 1270)


def test_address_ip_property():
    assert SocketAddress("127.0.0.1", 5).ip == "127.0.0.1"


def test_unresolvable_address_raises():
    with pytest.raises(SocketError):
        SocketAddress("no-such-host.invalid", 1).resolve()


def test_unresolvable_address_has_no_name_or_aliases():
    address = SocketAddress("no-such-host.invalid", 1)
    assert address.name() is None
    assert address.aliases() == []


def test_new_client_uses_default_send_delay():
    client = RobotClient()
    assert client.send_delay == pytest.approx(0.2)
    assert not client.connected


def test_send_and_read_over_socketpair():
    a, b = socket.socketpair()
    with _client(a) as client:
        assert client.send("PEN_UP\n") == len("PEN_UP\n")
        assert b.recv(64) == b"PEN_UP\n"
        b.sendall(b"OK")
        assert client.read(16) == b"OK"
    b.close()


def test_send_accepts_bytes():
    a, b = socket.socketpair()
    client = _client(a)
    assert client.send(b"HOME\n") == 5
    assert b.recv(64) == b"HOME\n"
    client.close()
    b.close()


def test_read_after_peer_close_returns_empty():
    a, b = socket.socketpair()
    client = _client(a)
    b.close()
    assert client.read(16) == b""
    client.close()


def test_close_disconnects_and_context_manager_closes():
    a, b = socket.socketpair()
    with _client(a) as client:
        assert client.connected
    assert not client.connected
    b.close()


def test_send_without_connection_raises():
    with pytest.raises(SocketError):
        _client().send("END\n")


def test_read_without_connection_raises():
    with pytest.raises(SocketError):
        RobotClient().read(10)


def test_connect_without_address_raises():
    with pytest.raises(SocketError):
        RobotClient().connect()


def test_connect_to_closed_port_raises():
    port = _free_port()
    with pytest.raises(SocketError):
        RobotClient().connect("127.0.0.1", port)


def test_connect_with_host_but_no_port_raises():
    with pytest.raises(ValueError):
        RobotClient().connect("127.0.0.1")


def test_connect_to_simulator_sends_commands():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    client = connect_to_simulator("127.0.0.1", port)
    client.send_delay = 0
    assert client.connected
    conn, _ = listener.accept()
    peer = _client(conn)
    assert client.send("CLEAR_TRACE\n") == len("CLEAR_TRACE\n")
    assert peer.read(64) == b"CLEAR_TRACE\n"
    client.close()
    peer.close()
    listener.close()


def test_connect_uses_stored_address():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    client = _client(address=SocketAddress("127.0.0.1", port))
    client.connect()
    assert client.connected
    conn, _ = listener.accept()
    peer = _client(conn)
    assert client.send("HOME\n") == 5
    assert peer.read(64) == b"HOME\n"
    client.close()
    peer.close()
    listener.close()


def test_server_bind_accepts_client():
    port = _free_port()
    server = ServerSocket(port, 5)
    result = {}

    def run():
        result["client"] = server.bind(SocketAddress("127.0.0.1", port))

    thread = threading.Thread(target=run, daemon=True)
    thread.start()

    client = _client()
    deadline = time.monotonic() + 5
    while True:
        try:
            client.connect("127.0.0.1", port)
            break
        except SocketError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)
    thread.join(5)

    accepted = result["client"]
    client.send("PEN_DOWN\n")
    assert accepted.read(64) == b"PEN_DOWN\n"
    assert accepted.address.host == "127.0.0.1"
    assert server.bound
    accepted.close()
    client.close()
    server.close()
    assert not server.bound
    assert server.address is None


def test_server_bind_to_unresolvable_address_raises():
    server = ServerSocket(_free_port(), 1)
    with pytest.raises(SocketError):
        server.bind(SocketAddress("no-such-host.invalid", 1))
    server.close()


def test_server_defaults():
    server = ServerSocket()
    assert server.port == 80
    assert server.queue == 10
    assert not server.bound