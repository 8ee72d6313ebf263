"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from kafkalo.core.config_parser import parse_configuration
from kafkalo.core.connect_service import ConnectService
from kafkalo.core.models import (
    Configuration,
    ConnectorDescriptor,
    OperationalSettings,
    TaskDescriptor,
)
from kafkalo.core.paths import normalize_schema_path
from kafkalo.core.protocols import ConnectAdmin, Decryptor

__all__: list[str] = [
    "Configuration",
    "ConnectAdmin",
    "ConnectService",
    "ConnectorDescriptor",
    "Decryptor",
    "OperationalSettings",
    "TaskDescriptor",
    "normalize_schema_path",
    "parse_configuration",
]
