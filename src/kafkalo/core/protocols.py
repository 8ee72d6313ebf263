"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from kafkalo.core.models import ConnectorDescriptor, TaskDescriptor


class Decryptor(Protocol):
    """Contract for settings-file decryption backends.

    Any object that implements :meth:`decrypt` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def decrypt(self, data: bytes) -> bytes:
        """Return the plaintext document for an encrypted *data* payload.

        Implementations are only called once the payload is known to
        carry encryption metadata.

        Raises
        ------
        ConfigDecryptError
            When the envelope is corrupt, a key is unavailable, or the
            backend itself cannot run.
        """
        ...  # pragma: no cover


class ConnectAdmin(Protocol):
    """Contract for Kafka Connect administration clients.

    States of connectors and tasks are authoritative on the remote
    cluster; implementations pass them through verbatim and keep no
    local state.  All backend-specific exceptions must be mapped to
    :class:`~kafkalo.exceptions.KafkaloError` subclasses.
    """

    def list_connectors(self) -> list[str]:
        """Return connector names in the order the cluster reports them.

        Raises
        ------
        ConnectUnavailableError
            On any transport failure or malformed response.
        """
        ...  # pragma: no cover

    def get_connector_info(self, name: str) -> ConnectorDescriptor:
        """Return the name and configuration of connector *name*.

        Raises
        ------
        ConnectorNotFoundError
            When the cluster reports the connector as absent.
        ConnectUnavailableError
            On any transport failure or malformed response.
        """
        ...  # pragma: no cover

    def list_tasks_for_connector(self, name: str) -> list[TaskDescriptor]:
        """Return the tasks of connector *name*.

        A task whose worker is unreachable is reported with status
        ``UNASSIGNED`` instead of failing the whole call.

        Raises
        ------
        ConnectorNotFoundError
            When the cluster reports the connector as absent.
        ConnectUnavailableError
            On any transport failure or malformed response.
        """
        ...  # pragma: no cover
