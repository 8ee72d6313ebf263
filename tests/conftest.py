"""Shared pytest fixtures and configuration for the kafkalo test suite.

Guidelines
----------
* No network access in any test — Connect is served by ``httpx.MockTransport``.
* The sops binary is mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Filesystem tests work inside ``tmp_path`` only.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Rendered tables are compared as plain text; keep Rich from emitting ANSI.
os.environ["TERM"] = "dumb"
os.environ.pop("FORCE_COLOR", None)

SAMPLE_SETTINGS = """\
connections:
  kafka:
    bootstrapBrokers: ["broker1:9092", "broker2:9092"]
    ssl:
      enabled: true
      caPath: /etc/kafka/ca.pem
      skipVerify: false
    kerberos:
      enabled: true
      keytab: /etc/kafka/kafkalo.keytab
      serviceName: kafka
      realm: EXAMPLE.COM
      username: kafkalo
      password: kerberos-secret
      krb5Path: /etc/krb5.conf
    producer:
      maxMessageBytes: 1048576
      compression: lz4
  schemaregistry:
    url: https://registry:8081
    timeout: 10
    username: sr-user
    password: sr-secret
    caPath: /etc/kafka/sr-ca.pem
    skipVerify: true
    skipRegistryForReads: true
  mds:
    url: https://mds:8090
    username: mds-user
    password: mds-secret
    schema-registry-cluster-id: schema-registry
    connect-cluster-id: connect-cluster
    ksql-cluster-id: ksql-cluster
    caPath: /etc/kafka/mds-ca.pem
    skipVerify: false
  connect:
    url: http://connect:8083
    username: connect-user
    password: connect-secret
    caPath: ""
    skipVerify: true
kafkalo:
  input_dirs:
    - "data/*.yaml"
    - "extra.yaml"
  schema_dir: schemas
  connectors_sensitive_keys: "(?i)password|token"
"""


@pytest.fixture()
def settings_text() -> str:
    """A complete plaintext settings document."""
    return SAMPLE_SETTINGS


@pytest.fixture()
def settings_file(tmp_path: Path, settings_text: str) -> Path:
    """The sample settings document written to ``tmp_path``."""
    path = tmp_path / "kafkalo.yaml"
    path.write_text(settings_text, encoding="utf-8")
    return path
