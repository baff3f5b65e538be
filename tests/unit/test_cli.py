# tests/unit/test_cli.py
"""
Unit tests for the command line interface.
"""

from unittest.mock import MagicMock, patch

import pytest

from gke_mcp import cli
from gke_mcp.install import InstallError


class TestParser:
    """Tests for argument parsing."""

    def test_serve_is_default(self):
        args = cli.build_parser().parse_args(["--transport", "streamable-http", "--port", "9000"])

        assert args.command is None
        assert args.transport == "streamable-http"
        assert args.port == 9000
        assert args.skip_auth_check is False

    def test_install_gemini_developer(self):
        args = cli.build_parser().parse_args(["install", "gemini-cli", "--developer"])

        assert args.command == "install"
        assert args.target == "gemini-cli"
        assert args.developer is True

    def test_install_requires_target(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["install"])

    def test_unknown_transport_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--transport", "websocket"])


class TestInstallCommand:
    """Tests for gke-mcp install."""

    def test_gemini_cli(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        with patch.object(cli, "install_gemini_cli_extension", return_value=tmp_path / "ext") as install:
            assert cli.main(["install", "gemini-cli"]) == 0

        install.assert_called_once()
        assert install.call_args.args[0] == tmp_path
        assert install.call_args.kwargs["developer"] is False
        assert "gemini-cli extension" in capsys.readouterr().out

    def test_cursor_project_only(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch.object(cli, "install_cursor_extension", return_value=tmp_path / "mcp.json") as install:
            assert cli.main(["install", "cursor", "--project-only"]) == 0

        assert install.call_args.kwargs["project_only"] is True

    def test_install_failure(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        with patch.object(cli, "install_cursor_extension", side_effect=InstallError("bad mcp.json")):
            assert cli.main(["install", "cursor"]) == 1

        assert "bad mcp.json" in capsys.readouterr().err


class TestServeCommand:
    """Tests for running the server."""

    def test_overrides_applied_and_clients_closed(self, tmp_path):
        bundle = MagicMock()
        with patch("gke_mcp.server.create_server", return_value=bundle) as create, \
                patch.object(cli, "setup_logging"):
            code = cli.main([
                "--config-dir", str(tmp_path),
                "--transport", "streamable-http",
                "--port", "9100",
                "--skip-auth-check",
            ])

        assert code == 0
        config = create.call_args.args[0]
        assert config.server.port == 9100
        assert create.call_args.kwargs["skip_auth_check"] is True
        bundle.server.run.assert_called_once_with(
            transport="streamable-http", host="127.0.0.1", port=9100
        )
        bundle.close.assert_called_once()

    def test_server_error(self, tmp_path):
        with patch("gke_mcp.server.create_server", side_effect=RuntimeError("boom")), \
                patch.object(cli, "setup_logging"):
            assert cli.main(["--config-dir", str(tmp_path)]) == 1
