"""Base classes for upstream API providers."""

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..core.exceptions import DataSourceError
from ..core.models import AuditEntry
from ..core.types import DataSource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseProvider:
    """Base class for all providers.

    Providers share one ``httpx.AsyncClient`` owned by the caller. Requests
    are issued once: no retry, no backoff. Every failure surfaces as a
    DataSourceError.
    """

    # Subclasses must define their data source
    SOURCE: DataSource = DataSource.UNKNOWN

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        """
        Initialize provider.

        Args:
            client: Shared async HTTP client (timeouts are configured on it)
            base_url: Scheme and host of the upstream API
        """
        self.client = client
        self.base_url = base_url.rstrip("/")
        self._audit_entries: list[AuditEntry] = []

    def _record_audit(
        self,
        action: str,
        endpoint: str | None = None,
        success: bool = True,
        error_message: str | None = None,
        duration_ms: int | None = None,
    ) -> AuditEntry:
        """Record an audit entry for this provider action."""
        entry = AuditEntry(
            source=self.SOURCE,
            action=action,
            endpoint=endpoint,
            success=success,
            error_message=error_message,
            duration_ms=duration_ms,
        )
        self._audit_entries.append(entry)
        return entry

    def get_audit_trail(self) -> list[AuditEntry]:
        """Return all audit entries recorded by this provider."""
        return self._audit_entries.copy()

    def clear_audit_trail(self) -> None:
        """Clear the audit trail."""
        self._audit_entries.clear()

    def _fail(
        self,
        action: str,
        endpoint: str,
        message: str,
        start_time: float,
        status_code: int | None = None,
    ) -> DataSourceError:
        duration_ms = int((time.time() - start_time) * 1000)
        self._record_audit(
            action=action,
            endpoint=endpoint,
            success=False,
            error_message=message,
            duration_ms=duration_ms,
        )
        logger.warning(f"[{self.SOURCE.value}] {action} {endpoint} failed: {message}")
        return DataSourceError(
            source=self.SOURCE.value,
            message=message,
            endpoint=endpoint,
            status_code=status_code,
        )

    async def _get_json(
        self,
        action: str,
        endpoint: str,
        start_time: float,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``base_url + endpoint`` and decode the JSON body."""
        url = f"{self.base_url}{endpoint}"

        try:
            response = await self.client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise self._fail(
                action,
                endpoint,
                f"HTTP {e.response.status_code}",
                start_time,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise self._fail(action, endpoint, str(e) or type(e).__name__, start_time) from e
        except ValueError as e:
            raise self._fail(action, endpoint, f"Invalid JSON: {e}", start_time) from e

    async def _get_model(
        self,
        model: type[ModelT],
        action: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ModelT:
        """Fetch an endpoint and validate the payload against its wire model.

        The call is audited as successful only once the payload validates.
        """
        start_time = time.time()
        data = await self._get_json(action, endpoint, start_time, params=params, headers=headers)

        try:
            parsed = model.model_validate(data)
        except SchemaError as e:
            raise self._fail(
                action,
                endpoint,
                f"Unexpected response shape for {model.__name__}: {e.error_count()} error(s)",
                start_time,
            ) from e

        duration_ms = int((time.time() - start_time) * 1000)
        self._record_audit(action=action, endpoint=endpoint, success=True, duration_ms=duration_ms)
        logger.debug(f"[{self.SOURCE.value}] {action} {endpoint} ok in {duration_ms}ms")
        return parsed
