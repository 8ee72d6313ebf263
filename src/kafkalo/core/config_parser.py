"""Raw settings document → :class:`~kafkalo.core.models.Configuration`.

The infra loader hands over whatever the YAML parser produced; this
module validates the shape field by field and builds the frozen models.

Guarantees
----------
* Pure conversion — no I/O, no ``print()``.
* Every shape problem raises :class:`~kafkalo.exceptions.ConfigParseError`
  naming the offending field path (e.g. ``connections.kafka.ssl.enabled``).
* Missing sections and fields fall back to the model defaults.
"""

from __future__ import annotations

import re
from typing import Any

from kafkalo.core.models import (
    Configuration,
    ConnectSettings,
    ConnectionSettings,
    KafkaSettings,
    KerberosSettings,
    MDSSettings,
    OperationalSettings,
    ProducerSettings,
    SchemaRegistrySettings,
    SSLSettings,
)
from kafkalo.exceptions import ConfigParseError


def parse_configuration(document: Any) -> Configuration:
    """Build a :class:`Configuration` from a parsed settings document.

    ``None`` (an empty file) yields the default configuration.

    Raises
    ------
    ConfigParseError
        If the document or any section has the wrong shape.
    """
    if document is None:
        return Configuration()
    root = _section(document, "")
    connections = _section(root.get("connections"), "connections")
    return Configuration(
        connections=ConnectionSettings(
            kafka=_parse_kafka(_section(connections.get("kafka"), "connections.kafka")),
            schema_registry=_parse_schema_registry(
                _section(connections.get("schemaregistry"), "connections.schemaregistry"),
            ),
            mds=_parse_mds(_section(connections.get("mds"), "connections.mds")),
            connect=_parse_connect(_section(connections.get("connect"), "connections.connect")),
        ),
        kafkalo=_parse_operational(_section(root.get("kafkalo"), "kafkalo")),
    )


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------

def _parse_kafka(raw: dict[str, Any]) -> KafkaSettings:
    path = "connections.kafka"
    ssl = _section(raw.get("ssl"), f"{path}.ssl")
    kerberos = _section(raw.get("kerberos"), f"{path}.kerberos")
    producer = _section(raw.get("producer"), f"{path}.producer")
    return KafkaSettings(
        brokers=_str_list(raw, "bootstrapBrokers", path),
        ssl=SSLSettings(
            enabled=_bool(ssl, "enabled", f"{path}.ssl"),
            ca_path=_str(ssl, "caPath", f"{path}.ssl"),
            skip_verify=_bool(ssl, "skipVerify", f"{path}.ssl"),
        ),
        kerberos=KerberosSettings(
            enabled=_bool(kerberos, "enabled", f"{path}.kerberos"),
            keytab=_str(kerberos, "keytab", f"{path}.kerberos"),
            service_name=_str(kerberos, "serviceName", f"{path}.kerberos"),
            realm=_str(kerberos, "realm", f"{path}.kerberos"),
            username=_str(kerberos, "username", f"{path}.kerberos"),
            password=_str(kerberos, "password", f"{path}.kerberos"),
            krb5_path=_str(kerberos, "krb5Path", f"{path}.kerberos"),
        ),
        producer=ProducerSettings(
            max_message_bytes=_int(producer, "maxMessageBytes", f"{path}.producer"),
            compression=_str(producer, "compression", f"{path}.producer"),
        ),
    )


def _parse_schema_registry(raw: dict[str, Any]) -> SchemaRegistrySettings:
    path = "connections.schemaregistry"
    return SchemaRegistrySettings(
        url=_str(raw, "url", path),
        timeout=_int(raw, "timeout", path),
        username=_str(raw, "username", path),
        password=_str(raw, "password", path),
        ca_path=_str(raw, "caPath", path),
        skip_verify=_bool(raw, "skipVerify", path),
        skip_rest_for_reads=_bool(raw, "skipRegistryForReads", path),
    )


def _parse_mds(raw: dict[str, Any]) -> MDSSettings:
    path = "connections.mds"
    return MDSSettings(
        url=_str(raw, "url", path),
        username=_str(raw, "username", path),
        password=_str(raw, "password", path),
        schema_registry_cluster_id=_str(raw, "schema-registry-cluster-id", path),
        connect_cluster_id=_str(raw, "connect-cluster-id", path),
        ksql_cluster_id=_str(raw, "ksql-cluster-id", path),
        ca_path=_str(raw, "caPath", path),
        skip_verify=_bool(raw, "skipVerify", path),
    )


def _parse_connect(raw: dict[str, Any]) -> ConnectSettings:
    path = "connections.connect"
    return ConnectSettings(
        url=_str(raw, "url", path),
        username=_str(raw, "username", path),
        password=_str(raw, "password", path),
        ca_path=_str(raw, "caPath", path),
        skip_verify=_bool(raw, "skipVerify", path),
    )


def _parse_operational(raw: dict[str, Any]) -> OperationalSettings:
    path = "kafkalo"
    schema_dir = _str(raw, "schema_dir", path) or None
    sensitive = _str(raw, "connectors_sensitive_keys", path) or None
    if sensitive is not None:
        try:
            re.compile(sensitive)
        except re.error as exc:
            raise ConfigParseError(
                f"{path}.connectors_sensitive_keys is not a valid regular expression: {exc}",
            ) from exc
    return OperationalSettings(
        input_dirs=_str_list(raw, "input_dirs", path),
        schema_dir=schema_dir,
        sensitive_keys_regex=sensitive,
    )


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _where(path: str, key: str | None = None) -> str:
    if key is None:
        return path or "document root"
    return f"{path}.{key}" if path else key


def _section(value: Any, path: str) -> dict[str, Any]:
    """Return *value* as a mapping; a missing section is empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigParseError(
            f"{_where(path)} must be a mapping, got {type(value).__name__}",
        )
    return value


def _str(raw: dict[str, Any], key: str, path: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    # YAML turns bare numbers into ints; ports and ids are still strings here.
    # Floats are rejected.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigParseError(
            f"{_where(path, key)} must be a string, got {type(value).__name__}",
        )
    return str(value)


def _bool(raw: dict[str, Any], key: str, path: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigParseError(
        f"{_where(path, key)} must be a boolean, got {value!r}",
    )


def _int(raw: dict[str, Any], key: str, path: str) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigParseError(f"{_where(path, key)} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigParseError(
            f"{_where(path, key)} must be an integer, got {value!r}",
        ) from exc


def _str_list(raw: dict[str, Any], key: str, path: str) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigParseError(
            f"{_where(path, key)} must be a list, got {type(value).__name__}",
        )
    items: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigParseError(
                f"{_where(path, key)}[{index}] must be a string, got {item!r}",
            )
        items.append(item)
    return tuple(items)
