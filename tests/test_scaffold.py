"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from kafkalo import __version__
from kafkalo.cli import exit_codes
from kafkalo.cli.app import cli, main
from kafkalo.exceptions import (
    ConfigDecryptError,
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    ConnectError,
    ConnectorNotFoundError,
    ConnectUnavailableError,
    EnvironmentError,
    InvalidConnectorNameError,
    KafkaloError,
    PatternError,
    SopsNotFoundError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigError,
            ConfigReadError,
            ConfigDecryptError,
            ConfigParseError,
            PatternError,
            InvalidConnectorNameError,
            ConnectError,
            ConnectorNotFoundError,
            ConnectUnavailableError,
            EnvironmentError,
            SopsNotFoundError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[KafkaloError]
    ) -> None:
        assert issubclass(exc_class, KafkaloError)

    @pytest.mark.parametrize("exc_class", [ConfigReadError, ConfigDecryptError, ConfigParseError])
    def test_config_errors_share_base(self, exc_class: type[KafkaloError]) -> None:
        assert issubclass(exc_class, ConfigError)

    def test_not_found_and_unavailable_are_distinct(self) -> None:
        assert not issubclass(ConnectorNotFoundError, ConnectUnavailableError)
        assert not issubclass(ConnectUnavailableError, ConnectorNotFoundError)
        assert issubclass(ConnectorNotFoundError, ConnectError)
        assert issubclass(ConnectUnavailableError, ConnectError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(KafkaloError, Exception)

    def test_hint_is_stored(self) -> None:
        err = KafkaloError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = KafkaloError("boom")
        assert err.hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_remote_error_is_three(self) -> None:
        assert exit_codes.REMOTE_ERROR == 3

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self) -> None:
        """No arguments should print help and exit 0."""
        assert main([]) == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_connect_requires_subcommand(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["connect"])
        assert exc_info.value.code == 2

    def test_describe_requires_connector(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["connect", "describe"])
        assert exc_info.value.code == 2

    @patch("kafkalo.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, mock_doctor: object) -> None:
        assert main(["--config", "custom.yaml", "doctor"]) == exit_codes.SUCCESS
        mock_doctor.assert_called_once_with("custom.yaml")  # type: ignore[attr-defined]

    @patch("kafkalo.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_config_env_var(
        self, mock_doctor: object, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("KAFKALO_CONFIG", "/etc/kafkalo/prod.yaml")
        main(["doctor"])
        mock_doctor.assert_called_once_with("/etc/kafkalo/prod.yaml")  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        def _boom() -> int:
            raise exc

        monkeypatch.setattr("kafkalo.cli.app.main", _boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code or 0)

    def test_kafkalo_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, ConfigParseError("bad [yaml]", hint="fix it"))
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "bad [yaml]" in err
        assert "fix it" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, RuntimeError("kaboom"))
        assert code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError" in capsys.readouterr().err

    def test_success_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("kafkalo.cli.app.main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
