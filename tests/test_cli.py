"""
Tests for the gdhttp command-line interface
"""

import io
import json
from unittest.mock import MagicMock, Mock

import pytest

from gdhttp import __version__
from gdhttp import cli
from gdhttp.exceptions import NetworkError
from gdhttp.signing import GeneDockAuth


@pytest.fixture
def client(monkeypatch):
    """Replace the request client; returns the mock receiving request()"""
    client = MagicMock()
    client_cls = MagicMock()
    client_cls.return_value.__enter__.return_value = client
    monkeypatch.setattr(cli, "GdHttpClient", client_cls)
    return client


@pytest.fixture
def tty_stdin(monkeypatch):
    monkeypatch.setattr(cli.sys, "stdin", Mock(isatty=Mock(return_value=True)))


@pytest.fixture
def empty_config(tmp_path):
    return str(tmp_path / "absent.json")


def sent_arguments(client):
    method, url, body, auth, hook = client.request.call_args[0]
    return method, url, body, auth, hook


class TestMain:
    """Test the CLI entry point"""

    def test_signed_get(self, client, tty_stdin, empty_config):
        """Test a signed request with credentials from flags"""
        code = cli.main([
            "-c", empty_config,
            "--access-key-id", "AKID",
            "--access-key-secret", "SECRET",
            "example.com/jobs/<id>", "id==42", "page=2",
        ])

        assert code == 0
        method, url, body, auth, hook = sent_arguments(client)
        assert method == "GET"
        assert url.geturl() == "http://example.com/jobs/42?page=2"
        assert body is None
        assert isinstance(auth, GeneDockAuth)
        assert auth.authenticator.context.key_id == "AKID"
        assert auth.authenticator.context.key_secret == b"SECRET"

    def test_config_credentials(self, client, tty_stdin, tmp_path):
        """Test credentials are looked up by host and port"""
        config_path = tmp_path / "gdhttp.json"
        config_path.write_text(json.dumps({
            "auths": {"localhost:3000": {"accessKeyID": "cfg-id", "accessKeySecret": "cfg-secret"}}
        }), encoding='utf-8')

        code = cli.main(["-c", str(config_path), "--access-key-id", "flag-id", "post", ":3000/jobs"])

        assert code == 0
        method, url, body, auth, hook = sent_arguments(client)
        assert method == "POST"
        assert auth.authenticator.context.key_id == "cfg-id"

    def test_no_auth(self, client, tty_stdin, tmp_path):
        """Test --no-auth skips signing and the config file"""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{", encoding='utf-8')

        code = cli.main(["--no-auth", "-c", str(config_path), ":8000"])

        assert code == 0
        assert sent_arguments(client)[3] is None

    def test_body_from_stdin(self, client, monkeypatch, empty_config):
        """Test the body is read from a non-terminal stdin"""
        monkeypatch.setattr(cli.sys, "stdin", io.StringIO('{"name": "job"}'))

        code = cli.main(["-c", empty_config, "PUT", "example.com/jobs/1"])

        assert code == 0
        assert sent_arguments(client)[2] == b'{"name": "job"}'

    def test_dump_flags(self, client, tty_stdin, empty_config):
        """Test -v and -b configure the dump hook"""
        cli.main(["-c", empty_config, "-v", "-b", "example.com"])

        hook = sent_arguments(client)[4]
        assert hook.verbose is True
        assert hook.only_body is True

    def test_timeout_flag(self, client, tty_stdin, empty_config):
        """Test the timeout reaches the client configuration"""
        cli.main(["-c", empty_config, "-t", "5", "example.com"])

        config = cli.GdHttpClient.call_args[0][0]
        assert config.timeout == 5

    def test_invalid_timeout(self, client, tty_stdin, empty_config, capsys):
        """Test a non-positive timeout is reported"""
        assert cli.main(["-c", empty_config, "-t", "0", "example.com"]) == 1
        assert "Timeout must be positive" in capsys.readouterr().err

    def test_help_argument(self, capsys):
        """Test `help` prints the detailed usage"""
        assert cli.main(["help"]) == 1
        assert "Sample configuration file" in capsys.readouterr().out

    def test_missing_url(self, capsys):
        """Test usage error without a URL"""
        assert cli.main([]) == 1

        captured = capsys.readouterr()
        assert captured.out.startswith("usage: gdhttp")
        assert "gdhttp: error: too few arguments" in captured.err

    def test_malformed_url(self, capsys):
        """Test malformed URLs are reported"""
        assert cli.main(["example.com:port"]) == 1
        assert "malformed URL" in capsys.readouterr().err

    def test_undecodable_query_argument(self, client, tty_stdin):
        """Test undecodable argument bytes reach the query unchanged"""
        assert cli.main(["--no-auth", "example.com", "q=\udcff"]) == 0
        assert sent_arguments(client)[1].query == "q=%FF"

    def test_undecodable_url_argument(self, client, capsys):
        """Test undecodable bytes in the URL path are a usage error"""
        assert cli.main(["--no-auth", "example.com/\udcff"]) == 1

        assert "invalid UTF-8" in capsys.readouterr().err
        client.request.assert_not_called()

    def test_timeout_help(self):
        """Test the help explains zero is not accepted as a timeout"""
        assert "must be positive" in cli.create_parser().format_help()

    def test_config_read_error(self, client, tty_stdin, tmp_path, capsys):
        """Test a malformed config file is fatal"""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{", encoding='utf-8')

        assert cli.main(["-c", str(config_path), "example.com"]) == 1
        assert "parse config file" in capsys.readouterr().err
        client.request.assert_not_called()

    def test_network_error(self, client, tty_stdin, empty_config, capsys):
        """Test network failures are fatal"""
        client.request.side_effect = NetworkError("Connection error: refused")

        assert cli.main(["-c", empty_config, "example.com"]) == 1
        assert "gdhttp: error: Connection error: refused" in capsys.readouterr().err

    def test_version(self, capsys):
        """Test --version prints the version"""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestReadBody:
    """Test stdin handling"""

    def test_terminal(self):
        assert cli.read_body(Mock(isatty=Mock(return_value=True))) is None

    def test_binary_buffer(self):
        stream = Mock(isatty=Mock(return_value=False), buffer=io.BytesIO(b"\x00\x01"))
        assert cli.read_body(stream) == b"\x00\x01"

    def test_none(self):
        assert cli.read_body(None) is None
