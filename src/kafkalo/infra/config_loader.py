"""Settings-file loader: read, decrypt when needed, parse.

This module is the **only** place in the codebase that imports ``yaml``.
The same code path serves encrypted and plaintext files; callers never
need to know which form was on disk.

Policy
------
Every failure is fatal to the load and raised as a
:class:`~kafkalo.exceptions.ConfigError` subclass — an unreadable file
is reported the same way as a malformed one, never silently turned into
an empty configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from kafkalo.core.config_parser import parse_configuration
from kafkalo.core.models import Configuration
from kafkalo.core.protocols import Decryptor
from kafkalo.exceptions import (
    ConfigDecryptError,
    ConfigParseError,
    ConfigReadError,
    KafkaloError,
)
from kafkalo.infra.sops_decryptor import SopsDecryptor, is_encrypted

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load a :class:`Configuration` from a YAML settings file.

    Parameters
    ----------
    decryptor:
        Backend used when the file carries an encryption envelope.
        Defaults to :class:`SopsDecryptor`.
    """

    def __init__(self, decryptor: Decryptor | None = None) -> None:
        self._decryptor: Decryptor = decryptor if decryptor is not None else SopsDecryptor()

    def load(self, path: str | Path) -> Configuration:
        """Read, decrypt (if encrypted) and parse the file at *path*.

        Raises
        ------
        ConfigReadError
            If the file cannot be read.
        ConfigDecryptError
            If the file is encrypted and decryption fails.
        ConfigParseError
            If the document is not valid YAML or has the wrong shape.
        """
        raw = self._read(Path(path))
        document = self._parse_yaml(raw, path)

        if is_encrypted(document):
            logger.info("Settings file %s is encrypted, decrypting", path)
            document = self._parse_yaml(self._decrypt(raw), path)
        else:
            logger.debug("Settings file %s has no encryption metadata", path)

        return parse_configuration(document)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _read(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ConfigReadError(
                f"Unable to read settings file {path}: {exc.strerror or exc}",
                hint="Pass the right file with --config or KAFKALO_CONFIG.",
            ) from exc

    def _decrypt(self, raw: bytes) -> bytes:
        """Call the decryptor and ensure only our exceptions escape."""
        try:
            return self._decryptor.decrypt(raw)
        except KafkaloError:
            raise
        except Exception as exc:
            raise ConfigDecryptError(f"Unexpected decryption error: {exc}") from exc

    @staticmethod
    def _parse_yaml(raw: bytes, path: str | Path) -> Any:
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"Failed to parse settings file {path}: {exc}") from exc


def load_config(path: str | Path, decryptor: Decryptor | None = None) -> Configuration:
    """Convenience wrapper around :meth:`ConfigLoader.load`."""
    return ConfigLoader(decryptor).load(path)
