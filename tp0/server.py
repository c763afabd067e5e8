"""Server: accepts one client and logs the messages and packages it sends."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Optional

from tp0.protocol import (
    INT_SIZE,
    OpCode,
    ProtocolError,
    decode_text,
    parse_values,
    unpack_int,
)

PORT = 4444
DEFAULT_LOG = "log.log"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s"

_log = logging.getLogger("Servidor")


class ClientDisconnected(ConnectionError):
    """Raised when the client closes the connection."""


def _recv_exact(sock: socket.socket, count: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < count:
        chunk = sock.recv(count - len(chunks))
        if not chunk:
            raise ClientDisconnected("connection closed by peer")
        chunks += chunk
    return bytes(chunks)


def start_server(host: Optional[str] = None, port: int = PORT) -> socket.socket:
    """Create an IPv4 listening socket bound to host and port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host or "", int(port)))
        sock.listen(socket.SOMAXCONN)
    except OSError:
        sock.close()
        raise
    _log.debug("Listo para escuchar a mi cliente")
    return sock


def wait_for_client(server_socket: socket.socket, logger: logging.Logger) -> socket.socket:
    """Accept one client connection."""
    client, _ = server_socket.accept()
    logger.info("Se conecto un cliente!")
    return client


def receive_operation(sock: socket.socket) -> int:
    """Read the next operation code; close the socket if the client left."""
    try:
        return unpack_int(_recv_exact(sock, INT_SIZE))
    except (ClientDisconnected, OSError) as exc:
        sock.close()
        if isinstance(exc, ClientDisconnected):
            raise
        raise ClientDisconnected(str(exc)) from exc


def receive_buffer(sock: socket.socket) -> bytes:
    """Read a size-prefixed payload."""
    size = unpack_int(_recv_exact(sock, INT_SIZE))
    if size < 0:
        raise ProtocolError(f"negative payload size {size}")
    return _recv_exact(sock, size)


def receive_message(sock: socket.socket) -> str:
    """Read the payload of a message frame as text."""
    return decode_text(receive_buffer(sock))


def receive_package(sock: socket.socket) -> list[str]:
    """Read the payload of a package frame as a list of values."""
    return parse_values(receive_buffer(sock))


def serve(sock: socket.socket, logger: logging.Logger) -> int:
    """Handle frames until the client disconnects; return the exit status."""
    while True:
        try:
            op_code = receive_operation(sock)
            if op_code == OpCode.MESSAGE:
                logger.info("Me llego el mensaje %s", receive_message(sock))
            elif op_code == OpCode.PACKAGE:
                values = receive_package(sock)
                logger.info("Me llegaron los siguientes valores:\n")
                for value in values:
                    logger.info("%s", value)
            else:
                logger.warning("Operacion desconocida. No quieras meter la pata")
        except ClientDisconnected:
            logger.error("el cliente se desconecto. Terminando servidor")
            return 1


def _create_logger(path: str) -> logging.Logger:
    logger = logging.getLogger("Servidor")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in (logging.FileHandler(path, encoding="utf-8"), logging.StreamHandler(sys.stdout)):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tp0-server")
    parser.add_argument("--host", default=None, help="address to bind")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    parser.add_argument("--log", default=DEFAULT_LOG, help="log file")
    args = parser.parse_args(argv)

    logger = _create_logger(args.log)
    with start_server(args.host, args.port) as server_socket:
        logger.info("Servidor listo para recibir al cliente")
        client = wait_for_client(server_socket, logger)
        with client:
            return serve(client, logger)


if __name__ == "__main__":
    sys.exit(main())