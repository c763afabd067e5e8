"""Client: logs console input, then sends a message and a package to the server."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Callable, Optional

from tp0.protocol import Package, message_frame

DEFAULT_CONFIG = "cliente.config"
DEFAULT_LOG = "cliente.log"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s"

InputFunc = Callable[[str], str]


def create_logger(path: str = DEFAULT_LOG, name: str = "CL_LOG") -> logging.Logger:
    """Return a logger writing INFO and above to a file and to stdout."""
    logger = logging.getLogger(name)
    _close_logger(logger)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    console_handler = logging.StreamHandler(sys.stdout)
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def _close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def load_config(path: str) -> dict[str, str]:
    """Read a KEY=VALUE configuration file; '#' starts a comment line."""
    config: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if sep:
                config[key.strip()] = value.strip()
    return config


def _read_line(input_func: InputFunc) -> str:
    try:
        return input_func("> ")
    except EOFError:
        return ""


def read_console(logger: logging.Logger, input_func: Optional[InputFunc] = None) -> list[str]:
    """Log every line typed until an empty one; return the non-empty lines."""
    read = input_func or input
    lines: list[str] = []
    while True:
        line = _read_line(read)
        logger.info(">> %s", line)
        if not line:
            return lines
        lines.append(line)


def build_package(input_func: Optional[InputFunc] = None) -> Package:
    """Collect lines until an empty one into a package."""
    read = input_func or input
    package = Package()
    for line in iter(lambda: _read_line(read), ""):
        package.add(line)
    return package


def create_connection(ip: str, port) -> socket.socket:
    """Open a TCP connection over IPv4 to the given host and port."""
    family, kind, proto, _, address = socket.getaddrinfo(
        ip, port, socket.AF_INET, socket.SOCK_STREAM
    )[0]
    sock = socket.socket(family, kind, proto)
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        raise
    return sock


def send_message(sock: socket.socket, message: str) -> None:
    """Send a single text message."""
    sock.sendall(message_frame(message))


def send_package(sock: socket.socket, package: Package) -> None:
    """Send a package of values."""
    sock.sendall(package.serialize())


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tp0-client")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="configuration file")
    parser.add_argument("--log", default=DEFAULT_LOG, help="log file")
    args = parser.parse_args(argv)

    try:
        logger = create_logger(args.log, "CL_LOG")
    except OSError as exc:
        print(f"Se revento todo el log: {exc}", file=sys.stderr)
        return 1
    try:
        logger.info("Hola! Soy un log")
        try:
            config = load_config(args.config)
            ip, port, value = config["IP"], config["PUERTO"], config["CLAVE"]
        except (OSError, KeyError) as exc:
            print(f"Error al intentar cargar el config: {exc}", file=sys.stderr)
            return 1
        logger.info("VALOR leido de la config: %s", value)

        read_console(logger)

        with create_connection(ip, port) as sock:
            send_message(sock, value)
            send_package(sock, build_package())
    finally:
        _close_logger(logger)

    print("\nCliente cerrado!!!!!!!!!!!!!1")
    return 0


if __name__ == "__main__":
    sys.exit(main())