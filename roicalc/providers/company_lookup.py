"""Company lookup provider -- proposes InputModel values for a company
from an external enrichment service."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from roicalc.config.settings import Settings
from roicalc.errors import LookupFailure
from roicalc.models.enums import LookupStatus
from roicalc.orchestrator.query_classifier import build_lookup_request, classify_query

from .base import ProviderBase
from .models import LookupResponse, LookupResult

logger = logging.getLogger(__name__)


class CompanyLookupProvider(ProviderBase):
    """Calls the company lookup service. Never raises to the caller."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        headers = {"Accept": "application/json"}
        if self._settings.lookup_api_key:
            headers["Authorization"] = f"Bearer {self._settings.lookup_api_key}"
        self._client = httpx.AsyncClient(
            timeout=self._settings.lookup_timeout_seconds,
            headers=headers,
        )

    async def health_check(self) -> bool:
        if not self._settings.lookup_api_url:
            return False
        try:
            resp = await self._client.get(self._settings.lookup_api_url)
            return resp.status_code < 500
        except Exception as e:
            logger.error(f"Company lookup health check failed: {e}")
            return False

    async def lookup(self, query: str) -> LookupResult:
        kind = classify_query(query)
        try:
            response = await self._fetch(query)
        except LookupFailure as e:
            logger.warning(f"Company lookup returned no data for '{query}': {e}")
            return LookupResult.no_data(query, kind, str(e))
        except Exception as e:
            logger.error(f"Company lookup failed for '{query}': {e}")
            return LookupResult.no_data(query, kind, f"Lookup failed: {e}")

        profile = response.data
        return LookupResult(
            query=query,
            kind=kind,
            status=LookupStatus.FOUND,
            profile=profile,
            suggestions=profile.suggestions(),
        )

    async def _fetch(self, query: str) -> LookupResponse:
        """POST the request and validate the body. Raises LookupFailure."""
        if not self._settings.lookup_api_url:
            raise LookupFailure("Company lookup service is not configured")

        payload = build_lookup_request(query)
        resp = await self._client.post(self._settings.lookup_api_url, json=payload)
        if resp.status_code != 200:
            raise LookupFailure(f"HTTP {resp.status_code}")

        try:
            body = LookupResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise LookupFailure(f"Malformed response: {e}") from e

        if not body.success or body.data is None:
            raise LookupFailure(body.error or "Service reported no match")
        return body

    async def aclose(self) -> None:
        await self._client.aclose()


class LookupTracker:
    """Keeps only the newest lookup's result.

    Each call to :meth:`run` takes a new generation; a result that comes back
    after a newer lookup has started is returned with status STALE and is
    never recorded as the current result.
    """

    def __init__(self, provider: ProviderBase):
        self._provider = provider
        self._generation = 0
        self.current: Optional[LookupResult] = None

    @property
    def generation(self) -> int:
        return self._generation

    async def run(self, query: str) -> LookupResult:
        self._generation += 1
        generation = self._generation
        # A new lookup invalidates whatever was shown before
        self.current = None

        result = await self._provider.lookup(query)
        result.generation = generation

        if generation != self._generation:
            logger.info(f"Discarding stale lookup result for '{query}'")
            result.status = LookupStatus.STALE
            return result

        self.current = result
        return result
