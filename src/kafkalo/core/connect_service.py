"""Core Kafka Connect service — the safe boundary around a ConnectAdmin.

This is the service class consumed by the CLI layer.  It depends on a
:class:`~kafkalo.core.protocols.ConnectAdmin` injected at construction
time (dependency inversion), keeping the core free of any HTTP imports.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``.
* Only :class:`~kafkalo.exceptions.KafkaloError` subclasses escape.
* Remote names, order and states are passed through untouched.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import TypeVar

from kafkalo.core.models import ConnectorDescriptor, TaskDescriptor
from kafkalo.core.protocols import ConnectAdmin
from kafkalo.exceptions import (
    ConnectUnavailableError,
    InvalidConnectorNameError,
    KafkaloError,
)

_T = TypeVar("_T")

DEFAULT_SENSITIVE_KEYS: str = r"(?i)(password|secret|credentials?)"
"""Used when ``kafkalo.connectors_sensitive_keys`` is not configured."""

MASK: str = "********"


class ConnectService:
    """Stateless service that queries connectors and their tasks.

    Parameters
    ----------
    admin:
        Any object satisfying the :class:`ConnectAdmin` protocol.
    sensitive_keys_regex:
        Pattern matching config keys whose values must not be shown.
        ``None`` selects :data:`DEFAULT_SENSITIVE_KEYS`.
    """

    def __init__(
        self,
        admin: ConnectAdmin,
        *,
        sensitive_keys_regex: str | None = None,
    ) -> None:
        self._admin: ConnectAdmin = admin
        self._sensitive: re.Pattern[str] = re.compile(
            sensitive_keys_regex or DEFAULT_SENSITIVE_KEYS,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_connectors(self) -> list[str]:
        """Return connector names exactly as the cluster reports them."""
        return list(self._call(self._admin.list_connectors))

    def get_connector_info(self, name: str) -> ConnectorDescriptor:
        """Return the descriptor of connector *name*.

        Raises
        ------
        InvalidConnectorNameError
            If *name* is empty or blank.
        ConnectorNotFoundError
            If the cluster does not know the connector.
        ConnectUnavailableError
            If the cluster cannot be reached or answers garbage.
        """
        name = self._validate_name(name)
        return self._call(lambda: self._admin.get_connector_info(name))

    def list_tasks_for_connector(self, name: str) -> list[TaskDescriptor]:
        """Return the tasks of connector *name* (same errors as above)."""
        name = self._validate_name(name)
        return list(self._call(lambda: self._admin.list_tasks_for_connector(name)))

    def masked_config(self, connector: ConnectorDescriptor) -> dict[str, str]:
        """Return *connector*'s config with sensitive values replaced."""
        return mask_sensitive(connector.config, self._sensitive)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_name(name: str) -> str:
        if not name.strip():
            raise InvalidConnectorNameError("Connector name must not be empty.")
        return name

    @staticmethod
    def _call(func: Callable[[], _T]) -> _T:
        """Call the admin client and ensure only our exceptions escape."""
        try:
            return func()
        except KafkaloError:
            raise
        except Exception as exc:
            raise ConnectUnavailableError(
                f"Unexpected Connect client error: {exc}",
            ) from exc


def mask_sensitive(config: Mapping[str, str], pattern: re.Pattern[str]) -> dict[str, str]:
    """Copy *config*, masking values whose key matches *pattern*."""
    return {
        key: MASK if pattern.search(key) else value
        for key, value in config.items()
    }
