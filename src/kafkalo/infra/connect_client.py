"""httpx backed implementation of :class:`~kafkalo.core.protocols.ConnectAdmin`.

Talks to the Kafka Connect REST API.  This module is the **only** place
in the codebase that imports ``httpx``; all httpx exceptions are caught
here and re-raised as typed :class:`~kafkalo.exceptions.KafkaloError`
subclasses — nothing raw escapes the infrastructure boundary.

Requests are synchronous, carry a bounded timeout and are never retried.
"""

from __future__ import annotations

import logging
import ssl
from typing import Any
from urllib.parse import quote

import httpx

from kafkalo.core.models import ConnectorDescriptor, ConnectSettings, TaskDescriptor
from kafkalo.exceptions import (
    ConfigError,
    ConnectorNotFoundError,
    ConnectUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S: float = 30.0
UNASSIGNED: str = "UNASSIGNED"
RUNNING: str = "RUNNING"


class HttpConnectAdmin:
    """Concrete :class:`ConnectAdmin` for one Connect cluster.

    Parameters
    ----------
    settings:
        The ``connections.connect`` section of the settings file.
    timeout_s:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport, used by tests to serve canned responses.
    """

    def __init__(
        self,
        settings: ConnectSettings,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not settings.url:
            raise ConfigError(
                "connections.connect.url is not set.",
                hint="Add the Kafka Connect REST URL to the settings file.",
            )
        auth = None
        if settings.username:
            auth = httpx.BasicAuth(settings.username, settings.password)
        self.client = httpx.Client(
            base_url=settings.url.rstrip("/"),
            auth=auth,
            verify=self._build_verify(settings),
            timeout=httpx.Timeout(timeout_s),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @staticmethod
    def _build_verify(settings: ConnectSettings) -> ssl.SSLContext | bool:
        if settings.skip_verify:
            return False
        try:
            return ssl.create_default_context(cafile=settings.ca_path or None)
        except (OSError, ssl.SSLError) as exc:
            raise ConfigError(
                f"Cannot load CA bundle {settings.ca_path}: {exc}",
                hint="Check connections.connect.caPath.",
            ) from exc

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_connectors(self) -> list[str]:
        """``GET /connectors`` — names in the order the cluster returns."""
        data = self._get("/connectors")
        if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
            raise ConnectUnavailableError("Connect returned a malformed connector list.")
        return list(data)

    def get_connector_info(self, name: str) -> ConnectorDescriptor:
        """``GET /connectors/{name}``."""
        data = self._get(f"/connectors/{quote(name, safe='')}", connector=name)
        if not isinstance(data, dict) or not isinstance(data.get("config"), dict):
            raise ConnectUnavailableError(
                f"Connect returned a malformed description for connector {name}.",
            )
        config = {str(key): _stringify(value) for key, value in data["config"].items()}
        return ConnectorDescriptor(name=str(data.get("name") or name), config=config)

    def list_tasks_for_connector(self, name: str) -> list[TaskDescriptor]:
        """``GET /connectors/{name}/status`` — task ids, states and workers."""
        data = self._get(f"/connectors/{quote(name, safe='')}/status", connector=name)
        raw_tasks = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(raw_tasks, list):
            raise ConnectUnavailableError(
                f"Connect returned a malformed status for connector {name}.",
            )
        return [self._parse_task(raw, name) for raw in raw_tasks]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> HttpConnectAdmin:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport + exception mapping
    # ------------------------------------------------------------------

    def _get(self, path: str, *, connector: str | None = None) -> Any:
        logger.debug("GET %s%s", self.client.base_url, path)
        try:
            response = self.client.get(path)
        except httpx.TimeoutException as exc:
            raise ConnectUnavailableError(
                f"Timed out talking to Kafka Connect at {self.client.base_url}",
            ) from exc
        except httpx.HTTPError as exc:
            raise ConnectUnavailableError(
                f"Cannot reach Kafka Connect at {self.client.base_url}: {exc}",
                hint="Check connections.connect.url and network access.",
            ) from exc

        if response.status_code == 404 and connector is not None:
            raise ConnectorNotFoundError(f"Connector {connector} not found.")
        if response.is_error:
            raise ConnectUnavailableError(
                f"Kafka Connect answered {response.status_code} for {path}: "
                f"{_error_message(response)}",
                hint=(
                    "Check connections.connect.username and password."
                    if response.status_code in (401, 403)
                    else None
                ),
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectUnavailableError(
                f"Kafka Connect returned invalid JSON for {path}.",
            ) from exc

    @staticmethod
    def _parse_task(raw: Any, connector: str) -> TaskDescriptor:
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), int):
            raise ConnectUnavailableError(
                f"Connect returned a malformed task entry for connector {connector}.",
            )
        state = str(raw.get("state") or UNASSIGNED)
        return TaskDescriptor(
            id=raw["id"],
            status=state,
            worker_id=str(raw.get("worker_id") or ""),
            is_running=state == RUNNING,
        )


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _error_message(response: httpx.Response) -> str:
    """Pull the ``message`` field out of a Connect error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase
