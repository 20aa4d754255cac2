import asyncio
import sys
from pathlib import Path

import pytest

from sshtoolkit.config import (
    AddKeysToAgent,
    Config,
    ConfigError,
    HostNotFound,
    NoHome,
    parse,
    parse_home,
    parse_path,
)

SAMPLE = """\
Host other
    User bob
    Port 2200

Host target
    User alice
    HostName target.example.com
    Port 2222
    IdentityFile /keys/id_test
    ProxyCommand nc %h %p

Host third
    User carol
"""


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_parse_reads_matching_block():
    config = parse(SAMPLE, "target")
    assert config.user == "alice"
    assert config.host_name == "target.example.com"
    assert config.port == 2222
    assert config.identity_file == "/keys/id_test"
    assert config.proxy_command == "nc %h %p"


def test_parse_stops_at_next_host():
    config = parse(SAMPLE, "other")
    assert config.user == "bob"
    assert config.port == 2200
    assert config.host_name == "other"
    assert config.identity_file is None
    assert config.proxy_command is None


def test_parse_unknown_host_raises():
    with pytest.raises(HostNotFound):
        parse(SAMPLE, "missing")


def test_host_not_found_is_config_error():
    with pytest.raises(ConfigError):
        parse("", "anything")


def test_default_port_and_agent_setting():
    config = parse("Host h\n  User u\n", "h")
    assert config.port == 22
    assert config.add_keys_to_agent is AddKeysToAgent.NO


def test_invalid_port_is_ignored():
    config = parse("Host h\nPort notanumber\n", "h")
    assert config.port == 22
    config = parse("Host h\nPort 70000\n", "h")
    assert config.port == 22


def test_keys_are_case_insensitive():
    config = parse("host h\nUSER zed\nhOsTnAmE h.example.com\n", "h")
    assert config.user == "zed"
    assert config.host_name == "h.example.com"


def test_unknown_keys_and_bare_lines_are_ignored():
    config = parse("Host h\nCompression yes\nBareword\nUser u\n", "h")
    assert config.user == "u"


def test_unknown_agent_value_means_no():
    config = parse("Host h\nAddKeysToAgent maybe\n", "h")
    assert config.add_keys_to_agent is AddKeysToAgent.NO


def test_identity_file_home_expansion(fake_home):
    config = parse("Host h\nIdentityFile ~/.ssh/id_test\n", "h")
    assert Path(config.identity_file) == Path(fake_home) / ".ssh" / "id_test"


def test_config_default_uses_current_user(monkeypatch):
    monkeypatch.setenv("LOGNAME", "alice")
    config = Config.default("example.com")
    assert config.user == "alice"
    assert config.host_name == "example.com"
    assert config.port == 22
    assert config.proxy_command is None


def test_parse_path_roundtrip(tmp_path):
    path = tmp_path / "config"
    path.write_text(SAMPLE, encoding="utf-8")
    assert parse_path(path, "target") == parse(SAMPLE, "target")


def test_parse_path_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_path(tmp_path / "nope", "target")


def test_parse_home(fake_home):
    ssh_dir = fake_home / ".ssh"
    ssh_dir.mkdir()
    (ssh_dir / "config").write_text(SAMPLE, encoding="utf-8")
    config = parse_home("third")
    assert config.user == "carol"


def test_no_home_error_message():
    assert str(NoHome()) == "No home directory"
    assert str(HostNotFound()) == "Host not found"


@pytest.mark.asyncio
async def test_stream_through_proxy_command_substitutes(tmp_path):
    script = tmp_path / "echo_args.py"
    script.write_text("import sys\nprint(' '.join(sys.argv[1:]))\n", encoding="utf-8")
    config = Config(user="u", host_name="example.com", port=2222)
    config.proxy_command = f"{sys.executable} {script} %h %p"
    stream = await config.stream()
    async with stream:
        output = await stream.read()
    assert output.decode().strip() == "example.com 2222"
    assert config.proxy_command.endswith("example.com 2222")


@pytest.mark.asyncio
async def test_stream_tcp_connect():
    received = asyncio.get_running_loop().create_future()

    async def handle(reader, writer):
        data = await reader.readexactly(5)
        received.set_result(data)
        writer.write(data.upper())
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        config = Config(user="u", host_name="127.0.0.1", port=port)
        stream = await config.stream()
        async with stream:
            await stream.write(b"hello")
            await stream.flush()
            reply = await stream.read(5)
        assert await received == b"hello"
        assert reply == b"HELLO"
    finally:
        server.close()
        await server.wait_closed()