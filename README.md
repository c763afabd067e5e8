# tp0

A small TCP client and server pair that talk over a simple binary protocol.

## Wire format

Every frame begins with two 4-byte little-endian signed integers: the
operation code and then the payload size. The payload follows.

- `OpCode.MESSAGE` (0) carries one NUL-terminated UTF-8 string.
- `OpCode.PACKAGE` (1) carries a run of values. Each value is a 4-byte
  length followed by that many bytes; text values include their
  terminating NUL.

## Installation

```
pip install .
```

## Running

Start the server first:

```
tp0-server [--host HOST] [--port PORT] [--log FILE]
```

By default it listens on all IPv4 addresses on port 4444 and logs to
`log.log` and to standard output. It accepts a single client and logs every
message and package that client sends; unknown operation codes are logged as
warnings. When the client disconnects it logs an error and exits with
status 1.

Then start the client:

```
tp0-client [--config FILE] [--log FILE]
```

The client reads `KEY=VALUE` lines from its configuration file (default
`cliente.config`; lines starting with `#` are comments) and needs the keys
`IP`, `PUERTO` and `CLAVE`. It logs to `cliente.log` (by default) and to
standard output. It then works in three steps:

1. It echoes each line you type into the log. An empty line (or end of
   input) ends this step.
2. It connects to `IP`:`PUERTO` and sends the `CLAVE` value as a message.
3. It collects further lines into a package and sends it once you enter an
   empty line, then closes the connection.

If the log file cannot be opened, or the configuration file is missing or
lacks a key, the client prints an error and exits with status 1.

## Library use

```python
from tp0.protocol import Package, message_frame, parse_values

package = Package()
package.add("hello")
package.add("world")
frame = package.serialize()          # bytes ready to send

single = message_frame("CLAVE")      # one message frame
```

`parse_values` splits a package payload back into its values and raises
`ProtocolError` on a malformed payload.

On the sending side, `tp0.client.create_connection`, `send_message` and
`send_package` open a connection and write frames. On the receiving side,
`tp0.server.start_server`, `wait_for_client`, `receive_operation`,
`receive_message`, `receive_package` and `serve` accept a client and read its
frames. A closed connection raises `ClientDisconnected`.

## Limitations

The server handles exactly one client and stops when it leaves; it does not
accept further connections. Neither side encrypts or authenticates traffic,
and the server sends nothing back to the client.

## Tests

```
pip install .[test]
pytest
```