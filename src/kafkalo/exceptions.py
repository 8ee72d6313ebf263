"""Custom exception hierarchy for kafkalo.

All exceptions that cross layer boundaries must inherit from
:class:`KafkaloError`.  Raw third-party exceptions (PyYAML, httpx,
subprocess, OS errors) must NEVER propagate beyond the infrastructure
layer — they must be caught and re-raised as a typed subclass defined
here.

Hierarchy
---------
KafkaloError
├── ConfigError
│   ├── ConfigReadError
│   ├── ConfigDecryptError
│   └── ConfigParseError
├── PatternError
├── InvalidConnectorNameError
├── ConnectError
│   ├── ConnectorNotFoundError
│   └── ConnectUnavailableError
└── EnvironmentError
    └── SopsNotFoundError
"""

from __future__ import annotations


class KafkaloError(Exception):
    """Base exception for all kafkalo errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Settings file ---------------------------------------------------------

class ConfigError(KafkaloError):
    """Base class for failures while loading the settings file."""


class ConfigReadError(ConfigError):
    """Raised when the settings file cannot be read from disk."""


class ConfigDecryptError(ConfigError):
    """Raised when an encrypted settings file cannot be decrypted."""


class ConfigParseError(ConfigError):
    """Raised when the settings document is malformed."""


# --- Input files -----------------------------------------------------------

class PatternError(KafkaloError):
    """Raised when an input pattern is not a valid glob expression."""


# --- Kafka Connect ---------------------------------------------------------

class InvalidConnectorNameError(KafkaloError):
    """Raised when a connector name is empty or blank."""


class ConnectError(KafkaloError):
    """Base class for errors reported while talking to Kafka Connect."""


class ConnectorNotFoundError(ConnectError):
    """Raised when the Connect cluster reports the connector as absent."""


class ConnectUnavailableError(ConnectError):
    """Raised on transport failures or malformed Connect responses."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(KafkaloError):
    """Raised when a required runtime dependency is not available."""


class SopsNotFoundError(EnvironmentError):
    """Raised when the sops binary cannot be located on the system PATH."""
