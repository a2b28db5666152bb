"""Tests for error resilience -- lookups failing and persisted state going bad."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from roicalc.config.settings import Settings
from roicalc.errors import InvalidInput
from roicalc.models.enums import LookupStatus
from roicalc.orchestrator.session import CalculatorSession
from roicalc.providers.company_lookup import CompanyLookupProvider, LookupTracker
from roicalc.storage.store import InMemoryStore, JsonFileStore, drivers_key, inputs_key


def _failing_provider(error: Exception) -> CompanyLookupProvider:
    with patch("roicalc.providers.company_lookup.httpx.AsyncClient") as MockClient:
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(side_effect=error)
        MockClient.return_value = mock_client
        provider = CompanyLookupProvider(
            settings=Settings(lookup_api_url="https://lookup.example.com/api/company")
        )
    provider._client = mock_client
    return provider


class TestLookupResilience:
    """A failing lookup never blocks manual entry."""

    @pytest.mark.asyncio
    async def test_timeout_doesnt_crash_tracker(self):
        tracker = LookupTracker(_failing_provider(httpx.ReadTimeout("timed out")))
        result = await tracker.run("Acme Corp")
        assert result.status is LookupStatus.NO_DATA
        assert result.suggestions == {}
        assert tracker.current is result

    @pytest.mark.asyncio
    async def test_failed_lookup_leaves_session_untouched(self, session):
        before = dict(session.inputs)
        tracker = LookupTracker(_failing_provider(httpx.ConnectError("refused")))
        result = await tracker.run("acme.com")
        session.apply_suggestions(result.suggestions)
        assert session.inputs == before
        assert session.evaluate().annual_benefit > 0


class TestPersistedStateResilience:
    """Corrupt or hand-edited persisted state falls back to preset defaults."""

    def test_corrupt_state_file_uses_defaults(self, tmp_path, marketing_preset):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        session = CalculatorSession(JsonFileStore(path))
        session.select_preset("marketing")
        assert session.inputs == marketing_preset.defaults

    def test_garbage_values_are_ignored(self, marketing_preset):
        store = InMemoryStore()
        store.set(
            inputs_key("marketing"),
            {"monthly_visitors": "lots", "campaigns_per_year": 9, "retired_field": 3},
        )
        store.set(drivers_key("marketing"), ["risk", "bogus"])
        session = CalculatorSession(store)
        session.select_preset("marketing")

        assert session.inputs["monthly_visitors"] == marketing_preset.defaults["monthly_visitors"]
        assert session.inputs["campaigns_per_year"] == 9
        assert "retired_field" not in session.inputs
        assert [d.value for d in session.enabled_drivers] == ["risk"]

    def test_wrong_shape_is_ignored(self, marketing_preset):
        store = InMemoryStore()
        store.set(inputs_key("marketing"), [1, 2, 3])
        store.set(drivers_key("marketing"), "revenue")
        session = CalculatorSession(store)
        session.select_preset("marketing")
        assert session.inputs == marketing_preset.defaults
        assert session.enabled_drivers == list(marketing_preset.enabled_drivers)

    def test_rejected_update_keeps_previous_inputs(self, session):
        before = dict(session.inputs)
        with pytest.raises(InvalidInput):
            session.update_inputs({"monthly_visitors": 60000, "campaigns_per_year": "six"})
        assert session.inputs == before
