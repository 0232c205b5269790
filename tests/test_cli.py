import re
import socket
import threading

import pytest

from scarasim.cli import (
    main,
    move_joint_test,
    move_linear_test,
    scara_test,
    simulator_command_test,
)
from scarasim.controller import ScaraController

VALID = re.compile(
    r"^(PEN_UP|PEN_DOWN|PEN_COLOR \d+ \d+ \d+|MOTOR_SPEED (HIGH|MEDIUM|LOW)"
    r"|ROTATE_JOINT ANG1 -?\d+\.\d\d ANG2 -?\d+\.\d\d)\n$"
)


class Recorder:
    def __init__(self):
        self.sent = []

    def send(self, data):
        self.sent.append(data)
        return len(data)


def _feed(monkeypatch, answers):
    it = iter(answers)

    def fake(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake)


def test_simulator_command_test_sequence():
    rec = Recorder()
    simulator_command_test(ScaraController(rec))
    assert rec.sent[:3] == [
        "MOTOR_SPEED HIGH\n",
        "PEN_UP\n",
        "ROTATE_JOINT ANG1 0.00 ANG2 0.00\n",
    ]
    assert rec.sent[-1] == "ROTATE_JOINT ANG1 0.00 ANG2 0.00\n"
    assert len(rec.sent) == 24
    assert "PEN_COLOR 0 255 0\n" in rec.sent


def test_scara_test_draws_two_squares():
    rec = Recorder()
    scara_test(ScaraController(rec))
    assert all(VALID.match(m) for m in rec.sent)
    assert rec.sent[:3] == ["PEN_UP\n", "PEN_COLOR 255 0 0\n", "MOTOR_SPEED HIGH\n"]
    assert "PEN_COLOR 255 0 255\n" in rec.sent
    assert "MOTOR_SPEED LOW\n" in rec.sent
    assert rec.sent.count("PEN_DOWN\n") == 2


def test_move_joint_test(monkeypatch, capsys):
    _feed(monkeypatch, [])
    rec = Recorder()
    move_joint_test(ScaraController(rec))
    assert all(VALID.match(m) for m in rec.sent)
    assert "MOTOR_SPEED LOW\n" in rec.sent
    assert "PEN_DOWN\n" in rec.sent
    assert capsys.readouterr().out.count("|SCARA STATE|") == 3


def test_move_linear_test(monkeypatch, capsys):
    _feed(monkeypatch, [])
    rec = Recorder()
    move_linear_test(ScaraController(rec))
    assert all(VALID.match(m) for m in rec.sent)
    assert rec.sent[-1] == "PEN_UP\n"
    assert "PEN_COLOR 0 255 0\n" in rec.sent
    out = capsys.readouterr().out
    for label in ("Easy", "Medium", "Hard", "Challenge"):
        assert f"{label} Lines Complete!" in out


def test_main_without_simulator(monkeypatch, capsys):
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    _feed(monkeypatch, [])
    assert main(["--port", str(port)]) == 0
    assert "Simulator must be started" in capsys.readouterr().out


def test_main_session(monkeypatch):
    server = socket.socket()
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    port = server.getsockname()[1]
    received = bytearray()

    def serve():
        conn, _ = server.accept()
        with conn:
            while chunk := conn.recv(4096):
                received.extend(chunk)

    thread = threading.Thread(target=serve)
    thread.start()
    _feed(monkeypatch, ["9", "", "1", "5", ""])
    try:
        assert main(["--port", str(port), "--delay", "0"]) == 0
        thread.join(timeout=5)
    finally:
        server.close()
    text = received.decode("ascii")
    assert text.startswith(
        "PEN_UP\nHOME\nCLEAR_TRACE\nCLEAR_POSITION_LOG\nCLEAR_REMOTE_COMMAND_LOG\n"
    )
    assert "MOTOR_SPEED MEDIUM\n" in text
    assert text.endswith("END\n")


@pytest.mark.parametrize("bad", [["--port", "notaport"]])
def test_main_rejects_bad_port(bad):
    with pytest.raises(SystemExit):
        main(bad)