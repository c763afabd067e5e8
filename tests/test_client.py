import socket
import threading

import pytest

from tp0.client import (
    build_package,
    create_connection,
    create_logger,
    load_config,
    main,
    read_console,
    send_message,
    send_package,
)
from tp0.protocol import Package, message_frame, parse_values


def _feeder(lines):
    items = iter(lines)

    def read(prompt=""):
        try:
            return next(items)
        except StopIteration:
            raise EOFError

    return read


def _recv_all(sock):
    return b"".join(iter(lambda: sock.recv(4096), b""))


def test_load_config(tmp_path):
    path = tmp_path / "cliente.config"
    path.write_text("# comentario\nIP=127.0.0.1\n\nPUERTO=4444\nCLAVE=a=b\n")
    assert load_config(str(path)) == {"IP": "127.0.0.1", "PUERTO": "4444", "CLAVE": "a=b"}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.config"))


def test_read_console_logs_until_empty(tmp_path):
    log_path = tmp_path / "c.log"
    logger = create_logger(str(log_path), "TEST_READ")
    lines = read_console(logger, _feeder(["hola", "mundo", "", "ignorada"]))
    assert lines == ["hola", "mundo"]
    content = log_path.read_text()
    assert ">> hola" in content
    assert ">> mundo" in content
    assert "ignorada" not in content


def test_read_console_stops_at_eof(tmp_path):
    logger = create_logger(str(tmp_path / "c.log"), "TEST_EOF")
    assert read_console(logger, _feeder(["solo"])) == ["solo"]


def test_build_package_collects_lines():
    package = build_package(_feeder(["a", "bb", "", "c"]))
    assert parse_values(bytes(package.stream)) == ["a", "bb"]


def test_build_package_empty():
    package = build_package(_feeder([""]))
    assert package.stream == bytearray()


def test_send_message_writes_frame():
    left, right = socket.socketpair()
    with left, right:
        send_message(left, "clave")
        left.shutdown(socket.SHUT_WR)
        assert _recv_all(right) == message_frame("clave")


def test_send_package_writes_frame():
    package = Package()
    package.add("x")
    left, right = socket.socketpair()
    with left, right:
        send_package(left, package)
        left.shutdown(socket.SHUT_WR)
        assert _recv_all(right) == package.serialize()


def test_create_connection_connects():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        with create_connection("127.0.0.1", str(port)) as sock:
            conn, _ = listener.accept()
            with conn:
                assert conn.getpeername() == sock.getsockname()


def test_main_missing_config(tmp_path):
    code = main(["--config", str(tmp_path / "nada.config"), "--log", str(tmp_path / "c.log")])
    assert code == 1


def test_main_end_to_end(tmp_path, monkeypatch):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        config = tmp_path / "cliente.config"
        config.write_text(f"IP=127.0.0.1\nPUERTO={port}\nCLAVE=mi_clave\n")

        received = {}

        def accept():
            conn, _ = listener.accept()
            with conn:
                received["data"] = _recv_all(conn)

        thread = threading.Thread(target=accept)
        thread.start()
        monkeypatch.setattr("builtins.input", _feeder(["consola", "", "uno", "dos", ""]))
        code = main(["--config", str(config), "--log", str(tmp_path / "c.log")])
        thread.join(5)

    expected = Package()
    expected.add("uno")
    expected.add("dos")
    assert code == 0
    assert received["data"] == message_frame("mi_clave") + expected.serialize()
    assert "VALOR leido de la config: mi_clave" in (tmp_path / "c.log").read_text()