"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, the sops binary
and the Kafka Connect REST API.  Every raw third-party exception must be
caught here and re-raised as a :class:`~kafkalo.exceptions.KafkaloError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from kafkalo.infra.config_loader import ConfigLoader, load_config
from kafkalo.infra.connect_client import HttpConnectAdmin
from kafkalo.infra.input_resolver import resolve_input_files
from kafkalo.infra.sops_decryptor import SopsDecryptor, SopsStatus, detect_sops, require_sops

__all__: list[str] = [
    "ConfigLoader",
    "HttpConnectAdmin",
    "SopsDecryptor",
    "SopsStatus",
    "detect_sops",
    "load_config",
    "require_sops",
    "resolve_input_files",
]
