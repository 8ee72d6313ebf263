"""Tests for sops detection and decryption (infra/sops_decryptor.py).

All tests mock :func:`shutil.which` and :func:`subprocess.run` — no
system dependency.

Coverage:
* ``detect_sops`` when sops is found / missing.
* ``require_sops`` happy path and ``SopsNotFoundError``.
* Envelope detection on parsed documents.
* ``SopsDecryptor`` success, non-zero exit, missing binary, OS errors.
* The temporary file is always removed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kafkalo.exceptions import ConfigDecryptError, SopsNotFoundError
from kafkalo.infra.sops_decryptor import (
    SopsDecryptor,
    SopsStatus,
    _platform_install_commands,
    detect_sops,
    is_encrypted,
    require_sops,
)

WHICH = "kafkalo.infra.sops_decryptor.shutil.which"
RUN = "kafkalo.infra.sops_decryptor.subprocess.run"


def _completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
    proc = MagicMock(spec=subprocess.CompletedProcess)
    proc.returncode = returncode
    proc.stdout = stdout
    proc.stderr = stderr
    return proc


# ---------------------------------------------------------------------------
# detect_sops / require_sops
# ---------------------------------------------------------------------------

class TestDetectSops:
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_found(self, _mock_which: object) -> None:
        status = detect_sops()
        assert status.found is True
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch(WHICH, return_value=None)
    def test_not_found(self, _mock_which: object) -> None:
        status = detect_sops()
        assert status.found is False
        assert status.path is None
        assert status.version_hint == "not found"
        assert len(status.install_commands) > 0


class TestRequireSops:
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_found_returns_path(self, _mock_which: object) -> None:
        assert isinstance(require_sops(), Path)

    @patch(WHICH, return_value=None)
    def test_missing_raises(self, _mock_which: object) -> None:
        with pytest.raises(SopsNotFoundError, match="not installed") as exc_info:
            require_sops()
        assert exc_info.value.hint is not None
        assert "Install sops" in exc_info.value.hint


class TestPlatformInstallCommands:
    @patch("kafkalo.infra.sops_decryptor.platform.system", return_value="Darwin")
    def test_macos(self, _mock_system: object) -> None:
        assert _platform_install_commands() == ("brew install sops",)

    @patch("kafkalo.infra.sops_decryptor.platform.system", return_value="Plan9")
    def test_unknown_platform_fallback(self, _mock_system: object) -> None:
        commands = _platform_install_commands()
        assert len(commands) == 1
        assert "github.com/getsops/sops" in commands[0]


class TestSopsStatus:
    def test_frozen(self) -> None:
        status = SopsStatus(found=False, path=None, version_hint="", install_commands=())
        with pytest.raises(AttributeError):
            status.found = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Envelope detection
# ---------------------------------------------------------------------------

class TestIsEncrypted:
    @pytest.mark.parametrize(
        "document",
        [
            {"sops": {"mac": "ENC[...]", "version": "3.8.1"}},
            {"a": 1, "sops": {"version": "3.7.0"}},
            {"sops": {"mac": "ENC[...]"}},
        ],
    )
    def test_envelope_detected(self, document: object) -> None:
        assert is_encrypted(document) is True

    @pytest.mark.parametrize(
        "document",
        [
            None,
            [],
            "sops",
            {},
            {"connections": {}},
            {"sops": "not-a-mapping"},
            {"sops": {"unrelated": True}},
        ],
    )
    def test_plaintext(self, document: object) -> None:
        assert is_encrypted(document) is False


# ---------------------------------------------------------------------------
# SopsDecryptor
# ---------------------------------------------------------------------------

class TestSopsDecryptor:
    @patch(RUN)
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_returns_plaintext(self, _mock_which: object, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout=b"kafkalo: {}\n")
        assert SopsDecryptor().decrypt(b"encrypted") == b"kafkalo: {}\n"

    @patch(RUN)
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_command_line(self, _mock_which: object, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout=b"")
        SopsDecryptor().decrypt(b"encrypted")

        cmd = mock_run.call_args.args[0]
        assert cmd[0].endswith("sops")
        assert "--decrypt" in cmd
        assert cmd[cmd.index("--input-type") + 1] == "yaml"
        assert cmd[cmd.index("--output-type") + 1] == "yaml"
        assert cmd[-1].endswith(".yaml")

    @patch(RUN)
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_payload_written_and_removed(
        self, _mock_which: object, mock_run: MagicMock,
    ) -> None:
        seen: dict[str, Path] = {}

        def _run(cmd: list[str], **_kwargs: object) -> MagicMock:
            seen["path"] = Path(cmd[-1])
            assert seen["path"].read_bytes() == b"ciphertext"
            return _completed(stdout=b"ok")

        mock_run.side_effect = _run
        SopsDecryptor().decrypt(b"ciphertext")

        assert not seen["path"].exists()

    @patch(RUN)
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_nonzero_exit_raises(self, _mock_which: object, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=128, stderr=b"Failed to get the data key")
        with pytest.raises(ConfigDecryptError, match="Failed to get the data key") as exc_info:
            SopsDecryptor().decrypt(b"encrypted")
        assert exc_info.value.hint is not None

    @patch(RUN)
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_nonzero_exit_without_stderr(self, _mock_which: object, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1)
        with pytest.raises(ConfigDecryptError, match="exit code 1"):
            SopsDecryptor().decrypt(b"encrypted")

    @patch(RUN, side_effect=PermissionError(13, "Permission denied"))
    @patch(WHICH, return_value="/usr/bin/sops")
    def test_os_error_raises(self, _mock_which: object, _mock_run: object) -> None:
        with pytest.raises(ConfigDecryptError, match="Could not run sops"):
            SopsDecryptor().decrypt(b"encrypted")

    @patch(RUN)
    @patch(WHICH, return_value=None)
    def test_missing_binary_raises_decrypt_error(
        self, _mock_which: object, mock_run: MagicMock,
    ) -> None:
        with pytest.raises(ConfigDecryptError, match="sops is not available"):
            SopsDecryptor().decrypt(b"encrypted")
        mock_run.assert_not_called()
