# sshtoolkit

Building blocks for SSH clients. The package uses only the standard library.
It needs Python 3.10 or newer.

- `sshtoolkit.cryptovec.CryptoVec` is a growable byte buffer for secrets. It
  overwrites its contents with zeros when it is truncated, cleared,
  reallocated or garbage collected.
- `sshtoolkit.config` looks up a host in OpenSSH-style client configuration
  text, such as `~/.ssh/config`.
- `sshtoolkit.proxy.Stream` is an asyncio byte stream. It runs over a direct
  TCP connection or over the stdin/stdout of a proxy command.

## Installation

```
pip install .
```

## CryptoVec

```python
from sshtoolkit.cryptovec import CryptoVec

buf = CryptoVec(b"secret")
buf.push_u32_be(43554)
assert buf.read_u32_be(6) == 43554
assert buf[:6] == b"secret"

buf.clear()          # the old bytes are overwritten with zeros
assert buf.is_empty()
```

Constructors:

- `CryptoVec(data)` takes `bytes`, `bytearray`, `memoryview` or `str`. A `str` is encoded as UTF-8.
- `CryptoVec.new_zeroed(size)` returns a buffer of `size` zero bytes.
- `CryptoVec.with_capacity(capacity)` returns an empty buffer with room reserved.
- `CryptoVec.from_slice(s)` returns a buffer holding a copy of `s`.

Capacity is always a power of two. You can read it from the `capacity`
property. When the buffer grows past its capacity, it moves to a new
allocation and the old one is zeroed.

Other operations:

- `resize(size)` pads the buffer with zeros. When it shrinks the buffer, it wipes the bytes it discards.
- `push(byte)` appends one byte.
- `extend(data)` appends bytes.
- `resize_mut(n)` grows the buffer by `n` zero bytes and returns a writable `memoryview` of them.
- Indexing and slicing read the contents, and assignment writes them. Slices come back as `bytes`.
- `len()`, `bool()`, `bytes()` and `==` work against other `CryptoVec` objects and bytes-like objects.
- `copy()` returns an independent copy.

File-like use:

- `write(buf)` appends and returns the length.
- `flush()` zeroes the spare capacity.
- `read(n_bytes, r)` appends up to `n_bytes` from a binary file-like object, using `readinto` when it is available, and returns the number of bytes read. If the read raises, the buffer is restored to its previous size.
- `write_all_from(offset, w)` passes everything from `offset` onward to `w.write` and returns its result. It raises `IndexError` if `offset` is not inside the buffer.

`read_u32_be` also raises `IndexError` if fewer than four bytes remain.

## SSH config

```python
from sshtoolkit.config import parse, HostNotFound

text = """
Host example
    HostName server.example.com
    User alice
    Port 2222
    IdentityFile ~/.ssh/id_ed25519
    AddKeysToAgent confirm
"""

cfg = parse(text, "example")
print(cfg.host_name, cfg.port, cfg.user, cfg.identity_file, cfg.add_keys_to_agent)

try:
    parse(text, "missing")
except HostNotFound:
    ...
```

There are three ways to look up a host:

- `parse(text, host)` reads configuration text.
- `parse_path(path, host)` reads a file.
- `parse_home(host)` reads `~/.ssh/config`. If no home directory can be found, it raises `NoHome`.

If no entry matches, `HostNotFound` is raised. All errors derive from `ConfigError`.

The result is a `Config` dataclass with these fields:

- `user`: defaults to the current login name.
- `host_name`: defaults to the requested host.
- `port`: defaults to 22.
- `identity_file`
- `proxy_command`
- `add_keys_to_agent`: an `AddKeysToAgent` value of `YES`, `CONFIRM`, `ASK` or `NO`, defaulting to `NO`.

`Config.default(host_name)` builds the defaults.

Parsing rules:

- A host matches when the text after `Host` is exactly the requested name.
- Settings are read from the following lines until the next `Host` line.
- Keys are case-insensitive. The understood keys are `User`, `HostName`, `Port`, `IdentityFile`, `ProxyCommand` and `AddKeysToAgent`. Other keys are ignored.
- A key must be separated from its value by a space.
- An invalid `Port` value is ignored.
- An `IdentityFile` starting with `~/` is expanded against the home directory.

## Connecting

```python
import asyncio
from sshtoolkit.config import parse_home

async def main():
    cfg = parse_home("example")
    async with await cfg.stream() as stream:
        await stream.write(b"SSH-2.0-client\r\n")
        await stream.flush()
        print(await stream.read(256))

asyncio.run(main())
```

`Config.stream()` opens the connection in one of two ways:

- If a proxy command is set, `%h` and `%p` in it are replaced by the host name and the port. The command is split on spaces and started, and the stream talks through its stdin and stdout.
- Otherwise the host name is resolved and a TCP connection is opened to the first address. If resolution yields no address, `NotResolvable` is raised.

You can also create streams directly:

- `Stream.tcp_connect((host, port))`
- `Stream.proxy_command(cmd, args)`

Stream methods:

- `read(n)`, `write(data)`, `flush()` and `shutdown()` are all coroutines.
- `shutdown()` closes the sending side.
- Leaving the `async with` block shuts the stream down. For a proxy command it then waits for the process to exit; for TCP it closes the connection.

## What this package does not do

- It does not speak the SSH protocol. `Stream` only carries bytes.
- The configuration lookup does not support host patterns or wildcards, multiple names on one `Host` line, `Match` or `Include`.
- `CryptoVec` cannot pin its memory against swapping. Any `bytes` you take out of it, for example with slicing or `bytes()`, are ordinary copies that are not wiped.

## Running the tests

```
pip install ".[test]"
pytest
```