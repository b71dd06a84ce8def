"""Tests for the API server launcher."""

from unittest.mock import patch

import run_api


class TestLauncher:

    def test_defaults(self, monkeypatch):
        for name in ("STREETWISE_API_HOST", "STREETWISE_API_PORT", "STREETWISE_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        args = run_api.build_parser().parse_args([])
        assert (args.host, args.port, args.log_level, args.reload) == ("0.0.0.0", 8000, "info", False)

    def test_environment_sets_defaults(self, monkeypatch):
        monkeypatch.setenv("STREETWISE_API_PORT", "9100")
        monkeypatch.setenv("STREETWISE_LOG_LEVEL", "WARNING")
        args = run_api.build_parser().parse_args([])
        assert args.port == 9100
        assert args.log_level == "warning"

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("STREETWISE_API_PORT", "9100")
        args = run_api.build_parser().parse_args(["--port", "8200"])
        assert args.port == 8200

    def test_dotenv_loaded_before_parsing(self, monkeypatch):
        monkeypatch.delenv("STREETWISE_API_PORT", raising=False)

        def load_env_file():
            monkeypatch.setenv("STREETWISE_API_PORT", "9300")

        with patch("run_api.load_dotenv", side_effect=load_env_file), \
                patch("run_api.uvicorn.run") as mock_run, patch("run_api.os.chdir"):
            run_api.main(["--reload"])

        kwargs = mock_run.call_args[1]
        assert mock_run.call_args[0][0] == "api.main:app"
        assert kwargs["port"] == 9300
        assert kwargs["reload"] is True
