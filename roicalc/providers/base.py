from __future__ import annotations

from abc import ABC, abstractmethod

from roicalc.providers.models import LookupResult


class ProviderBase(ABC):
    """Abstract base for company data providers."""

    @abstractmethod
    async def lookup(self, query: str) -> LookupResult:
        """Look up a company and return suggestions, or a NO_DATA result."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the provider API is reachable and authenticated."""
        ...
