"""Abstract upstream adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

import httpx

from repwatch.core.config import Settings
from repwatch.core.config import settings as default_settings
from repwatch.core.errors import UpstreamError, UpstreamMisconfigured, UpstreamUnavailable
from repwatch.core.logging import get_logger


@dataclass
class SourceResult:
    """Outcome of one adapter call: records, or the upstream error that prevented them."""

    source: str
    records: List[Any] = field(default_factory=list)
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> Optional[int]:
        return self.error.status_code if self.error else None

    def unwrap(self) -> List[Any]:
        if self.error is not None:
            raise self.error
        return self.records


class BaseSource(ABC):
    """One external API, mapped onto one canonical record type.

    Subclasses implement ``_fetch`` and raise ``UpstreamError`` subclasses
    freely; ``fetch`` converts them into a failed ``SourceResult`` so callers
    never see an exception for a bad upstream.
    """

    name: ClassVar[str]
    label: ClassVar[str]

    # canonical field -> upstream field names in priority order (dotted paths allowed)
    FIELD_ALIASES: ClassVar[Mapping[str, Tuple[str, ...]]] = {}

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
        log=None,
    ):
        self.transport = transport
        self.settings = settings or default_settings
        self.log = log or get_logger(f"sources.{self.name}")

    @property
    def timeout(self) -> float:
        return self.settings.HTTP_TIMEOUT_SECONDS

    async def fetch(self, params: Optional[Mapping[str, Any]] = None) -> SourceResult:
        try:
            records = await self._fetch(dict(params or {}))
        except UpstreamError as exc:
            self.log.warning(f"{self.label} unavailable: {exc.message}")
            return SourceResult(source=self.name, error=exc)
        self.log.info(f"Fetched {len(records)} records from {self.label}")
        return SourceResult(source=self.name, records=records)

    @abstractmethod
    async def _fetch(self, params: Dict[str, Any]) -> List[Any]:
        """Return canonical records; raise UpstreamError on failure."""

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------
    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
            **kwargs,
        )

    def require(self, value: Optional[str]) -> str:
        if not value:
            raise UpstreamMisconfigured(f"{self.label} API key not configured", source=self.name)
        return value

    async def get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        resp = await self._get(client, url, params=params, headers=headers)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable(
                f"{self.label} returned an unreadable body",
                source=self.name,
                status_code=resp.status_code,
            ) from exc

    async def get_object(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """``get_json`` for endpoints that answer with a JSON object."""
        data = await self.get_json(client, url, params=params, headers=headers)
        if not isinstance(data, dict):
            raise UpstreamUnavailable(
                f"{self.label} returned an unexpected payload ({type(data).__name__})",
                source=self.name,
            )
        return data

    async def get_bytes(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        resp = await self._get(client, url, params=params, headers=headers)
        return resp.content

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        try:
            resp = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"{self.label} request failed: {exc!r}", source=self.name) from exc
        if not resp.is_success:
            raise UpstreamUnavailable(
                f"{self.label} API error: {resp.status_code}",
                source=self.name,
                status_code=resp.status_code,
            )
        return resp

    # -------------------------------------------------------------------------
    # Field mapping
    # -------------------------------------------------------------------------
    @classmethod
    def pick(cls, item: Mapping[str, Any], canonical: str, default: Any = "") -> Any:
        """First non-empty upstream value for ``canonical`` per FIELD_ALIASES."""
        for path in cls.FIELD_ALIASES.get(canonical, (canonical,)):
            value = _lookup(item, path)
            if value is not None and value != "":
                return value
        return default

    @staticmethod
    def iso_date(value: Any) -> str:
        """Coerce ISO-8601, RFC 822 or datetime values to ``YYYY-MM-DD`` ("" if unparseable)."""
        if not value:
            return ""
        if isinstance(value, datetime):
            return value.astimezone(timezone.utc).date().isoformat() if value.tzinfo else value.date().isoformat()
        text = str(value).strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            pass
        try:
            return parsedate_to_datetime(text).date().isoformat()
        except (TypeError, ValueError, IndexError):
            pass
        if len(text) >= 10 and text[4] == "-" and text[7] == "-" and text[:4].isdigit():
            return text[:10]
        return ""

    @staticmethod
    def safe_float(value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (ValueError, TypeError):
            return None

    @staticmethod
    def safe_int(value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (ValueError, TypeError):
            return None


def _lookup(item: Mapping[str, Any], path: str) -> Any:
    value: Any = item
    for part in path.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        elif isinstance(value, list) and part.isdigit():
            value = value[int(part)] if int(part) < len(value) else None
        else:
            return None
    return value
