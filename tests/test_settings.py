"""Settings loading and the command-line entry point."""

import pytest

from shopify_mcp.config.settings import DEFAULT_API_VERSION, get_settings
from shopify_mcp.main import check_credentials, load_settings, parse_args


class TestSettings:

    def test_defaults(self):
        settings = get_settings()
        assert settings.api_version == DEFAULT_API_VERSION
        assert settings.default_location_id == "1"
        assert settings.request_timeout == 30.0
        assert settings.missing_credentials == ["SHOPIFY_ACCESS_TOKEN", "MYSHOPIFY_DOMAIN"]

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("MYSHOPIFY_DOMAIN", "env.myshopify.com")
        monkeypatch.setenv("REQUEST_TIMEOUT", "1500")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = get_settings()
        assert settings.shopify_access_token == "env-token"
        assert settings.myshopify_domain == "env.myshopify.com"
        assert settings.request_timeout == 1.5
        assert settings.log_level == "DEBUG"
        assert settings.missing_credentials == []

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("MYSHOPIFY_DOMAIN=file.myshopify.com\n")
        assert get_settings().myshopify_domain == "file.myshopify.com"

    def test_singleton(self):
        assert get_settings() is get_settings()


class TestEntryPoint:

    def test_flags_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("MYSHOPIFY_DOMAIN", "env.myshopify.com")

        args = parse_args(["--accessToken", "flag-token", "--apiVersion", "2025-01"])
        settings = load_settings(args)

        assert settings.shopify_access_token == "flag-token"
        assert settings.myshopify_domain == "env.myshopify.com"
        assert settings.api_version == "2025-01"

    def test_missing_credentials_exit_with_status_1(self, capsys):
        settings = load_settings(parse_args(["--domain", "demo.myshopify.com"]))
        with pytest.raises(SystemExit) as exc:
            check_credentials(settings)
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "SHOPIFY_ACCESS_TOKEN is required" in err
        assert "--accessToken" in err

    def test_complete_credentials_pass(self):
        settings = load_settings(parse_args(["--accessToken", "t", "--domain", "d.myshopify.com"]))
        check_credentials(settings)
