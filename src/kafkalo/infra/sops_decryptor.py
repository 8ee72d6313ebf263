"""Infrastructure: SOPS detection and settings-file decryption.

Encrypted settings files use the SOPS envelope: the document keeps its
YAML structure, values are replaced by ciphertext and a top-level
``sops`` block carries the key metadata.  Decryption is delegated to the
``sops`` binary so every key backend it supports (age, PGP, cloud KMS)
works without extra Python dependencies.

Rules
-----
* Detection via :func:`shutil.which` only.
* No ``print()`` — callers handle user-facing output.
* Every failure surfaces as :class:`~kafkalo.exceptions.ConfigDecryptError`.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kafkalo.exceptions import ConfigDecryptError, SopsNotFoundError

logger = logging.getLogger(__name__)

METADATA_KEY: str = "sops"
"""Top-level key holding the SOPS envelope metadata."""


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SopsStatus:
    """Result of a sops detection probe.

    Attributes
    ----------
    found : bool
        Whether sops was located on PATH.
    path : Path | None
        Absolute path to the sops binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing sops on the current
        platform.  Empty when sops is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_sops() -> SopsStatus:
    """Probe the system for a sops binary.

    Returns a :class:`SopsStatus` regardless of whether sops is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which("sops")

    if result is not None:
        resolved = Path(result).resolve()
        return SopsStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return SopsStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(),
    )


def require_sops() -> Path:
    """Locate sops or raise :class:`SopsNotFoundError`."""
    status = detect_sops()
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install sops using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise SopsNotFoundError(
            "sops is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def is_encrypted(document: Any) -> bool:
    """Return ``True`` when *document* carries SOPS envelope metadata."""
    if not isinstance(document, dict):
        return False
    metadata = document.get(METADATA_KEY)
    return isinstance(metadata, dict) and ("mac" in metadata or "version" in metadata)


def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Mozilla.SOPS",
            "choco install sops",
        )
    if system == "linux":
        return (
            "sudo apt install sops",
            "sudo pacman -S sops",
        )
    if system == "darwin":
        return ("brew install sops",)
    return ("Download a release from https://github.com/getsops/sops/releases",)


# ---------------------------------------------------------------------------
# Decryptor
# ---------------------------------------------------------------------------

class SopsDecryptor:
    """Concrete :class:`~kafkalo.core.protocols.Decryptor` backed by ``sops``.

    Usage::

        plaintext = SopsDecryptor().decrypt(Path("kafkalo.yaml").read_bytes())
    """

    def __init__(self, *, input_type: str = "yaml") -> None:
        self._input_type = input_type

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt *data* with ``sops --decrypt``.

        Raises
        ------
        ConfigDecryptError
            When sops is missing, exits non-zero, or cannot be started.
        """
        try:
            binary = require_sops()
        except SopsNotFoundError as exc:
            raise ConfigDecryptError(
                "Settings file is encrypted but sops is not available.",
                hint=exc.hint,
            ) from exc

        # sops picks the format from the file extension, so go through a
        # temporary file rather than stdin.
        fd, tmp_name = tempfile.mkstemp(suffix=f".{self._input_type}")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            cmd = [
                str(binary),
                "--decrypt",
                "--input-type", self._input_type,
                "--output-type", self._input_type,
                tmp_name,
            ]
            logger.debug("Running %s", " ".join(cmd[:-1]))
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as exc:
            raise ConfigDecryptError(f"Could not run sops: {exc}") from exc
        finally:
            Path(tmp_name).unlink(missing_ok=True)

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ConfigDecryptError(
                f"sops failed to decrypt the settings file: {stderr or 'exit code ' + str(proc.returncode)}",
                hint="Check that the decryption key (age, PGP or KMS) is available to sops.",
            )
        return proc.stdout
