"""Domain models for kafkalo.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
A :class:`Configuration` is built once per invocation and only read
afterwards; getting fresh settings means loading the file again.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Kafka connection settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SSLSettings:
    """TLS settings for the Kafka brokers."""

    enabled: bool = False
    ca_path: str = ""
    skip_verify: bool = False


@dataclass(frozen=True, slots=True)
class KerberosSettings:
    """SASL/GSSAPI settings for the Kafka brokers."""

    enabled: bool = False
    keytab: str = ""
    service_name: str = ""
    realm: str = ""
    username: str = ""
    password: str = ""
    krb5_path: str = ""


@dataclass(frozen=True, slots=True)
class ProducerSettings:
    """Producer tuning applied when kafkalo writes to Kafka."""

    max_message_bytes: int | None = None
    compression: str = ""


@dataclass(frozen=True, slots=True)
class KafkaSettings:
    """Connection settings for the Kafka cluster itself."""

    brokers: tuple[str, ...] = ()
    """Bootstrap brokers in declaration order (``host:port``)."""

    ssl: SSLSettings = field(default_factory=SSLSettings)
    kerberos: KerberosSettings = field(default_factory=KerberosSettings)
    producer: ProducerSettings = field(default_factory=ProducerSettings)


# ---------------------------------------------------------------------------
# Auxiliary services
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SchemaRegistrySettings:
    """Schema Registry connectivity."""

    url: str = ""
    timeout: int | None = None
    """Request timeout in seconds, or ``None`` for the client default."""

    username: str = ""
    password: str = ""
    ca_path: str = ""
    skip_verify: bool = False
    skip_rest_for_reads: bool = False


@dataclass(frozen=True, slots=True)
class MDSSettings:
    """Metadata service (RBAC) connectivity."""

    url: str = ""
    username: str = ""
    password: str = ""
    schema_registry_cluster_id: str = ""
    connect_cluster_id: str = ""
    ksql_cluster_id: str = ""
    ca_path: str = ""
    skip_verify: bool = False


@dataclass(frozen=True, slots=True)
class ConnectSettings:
    """Kafka Connect REST endpoint."""

    url: str = ""
    username: str = ""
    password: str = ""
    ca_path: str = ""
    skip_verify: bool = False


@dataclass(frozen=True, slots=True)
class ConnectionSettings:
    """Every remote system kafkalo may talk to."""

    kafka: KafkaSettings = field(default_factory=KafkaSettings)
    schema_registry: SchemaRegistrySettings = field(default_factory=SchemaRegistrySettings)
    mds: MDSSettings = field(default_factory=MDSSettings)
    connect: ConnectSettings = field(default_factory=ConnectSettings)


# ---------------------------------------------------------------------------
# Tool behaviour
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OperationalSettings:
    """The ``kafkalo`` section of the settings file."""

    input_dirs: tuple[str, ...] = ()
    """Glob or literal file patterns, in declaration order."""

    schema_dir: str | None = None
    """Root directory for relative schema file references."""

    sensitive_keys_regex: str | None = None
    """Regex matching connector config keys whose values are masked."""


@dataclass(frozen=True, slots=True)
class Configuration:
    """Root settings object produced by the config loader."""

    connections: ConnectionSettings = field(default_factory=ConnectionSettings)
    kafkalo: OperationalSettings = field(default_factory=OperationalSettings)


# ---------------------------------------------------------------------------
# Kafka Connect descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConnectorDescriptor:
    """A connector's name and its configuration as reported by Connect."""

    name: str
    config: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class TaskDescriptor:
    """One task of a connector.

    ``status`` is the remote state passed through verbatim
    (``RUNNING``, ``PAUSED``, ``FAILED``, ``UNASSIGNED`` ...).
    """

    id: int
    status: str
    worker_id: str
    is_running: bool
