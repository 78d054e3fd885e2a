"""
Test configuration and fixtures for Krishi Mitra AI.
"""

import asyncio
import json
from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from krishi_mitra.core.genai_client import GenAIClientProvider
from krishi_mitra.models.farmer_profile import ActivityLog, ActivityType, FarmerProfile
from krishi_mitra.services.advisory_mediator import AdvisoryMediator
from krishi_mitra.services.prompt_builder import PromptClock

FIXED_CLOCK = PromptClock(
    today=date(2026, 10, 19),
    now=datetime(2026, 10, 19, 6, 30, tzinfo=timezone.utc),
)


class StubModels:
    """Stands in for `client.aio.models`; records every generate_content call."""

    def __init__(self, responses: Optional[dict[str, Any]] = None, default: Any = ""):
        self.responses = responses or {}
        self.default = default
        self.calls: list[dict[str, Any]] = []

    def respond_with(self, reply: Any) -> None:
        self.default = reply

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        await asyncio.sleep(0)
        prompt_text = contents[-1].parts[-1].text
        reply = self.default
        for marker, candidate in self.responses.items():
            if marker in prompt_text:
                reply = candidate
                break
        if isinstance(reply, Exception):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return SimpleNamespace(text=reply)


class StubClient:
    def __init__(self, models: StubModels):
        self.models = models
        self.aio = SimpleNamespace(models=models)


class CountingFactory:
    def __init__(self, models: StubModels):
        self.models = models
        self.created = 0
        self.api_keys: list[str] = []

    def __call__(self, api_key: str) -> StubClient:
        self.created += 1
        self.api_keys.append(api_key)
        return StubClient(self.models)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def fixed_clock() -> PromptClock:
    return FIXED_CLOCK


@pytest.fixture
def stub_models() -> StubModels:
    return StubModels()


@pytest.fixture
def client_factory(stub_models) -> CountingFactory:
    return CountingFactory(stub_models)


@pytest.fixture
def provider(client_factory) -> GenAIClientProvider:
    return GenAIClientProvider(api_key="test-key", client_factory=client_factory)


@pytest.fixture
def keyless_provider(client_factory) -> GenAIClientProvider:
    return GenAIClientProvider(api_key="", client_factory=client_factory)


@pytest.fixture
def profile() -> FarmerProfile:
    return FarmerProfile(
        name="Ramesh Gowda",
        location="Mandya, Karnataka",
        land_size=2.5,
        main_crop="Sugarcane",
        soil_type="Clay",
        irrigation_method="Canal",
    )


@pytest.fixture
def activity_logs() -> list[ActivityLog]:
    types = list(ActivityType)
    return [
        ActivityLog(
            id=f"log-{day}",
            date=date(2026, 10, day),
            activity_type=types[day % len(types)],
            notes=f"note for day {day}",
        )
        for day in range(1, 9)
    ]


@pytest.fixture
def mediator(provider) -> AdvisoryMediator:
    return AdvisoryMediator(client_provider=provider, clock=lambda: FIXED_CLOCK)


@pytest.fixture
def weather_payload() -> dict:
    return {
        "location": "Mandya, Karnataka",
        "forecast": [
            {
                "day": day,
                "temp_high": 31.0 + i,
                "temp_low": 21.5,
                "condition": "Partly Cloudy",
                "precipitation_chance": 10 * i,
            }
            for i, day in enumerate(["Mon", "Tue", "Wed", "Thu", "Fri"])
        ],
    }


@pytest.fixture
def alerts_payload() -> list:
    return [
        {
            "id": "alert-1",
            "title": "Market Update",
            "message": "Sugarcane prices are stable this week.",
            "priority": "Low",
            "timestamp": "2026-10-19T06:30:00Z",
        },
        {
            "id": "alert-2",
            "title": "Pest Alert: Aphids",
            "message": "Inspect the underside of leaves in the next 1-2 days.",
            "priority": "High",
            "timestamp": "2026-10-19T06:30:00Z",
        },
        {
            "id": "alert-3",
            "title": "Irrigation Reminder",
            "message": "No irrigation logged this week and the forecast is dry.",
            "priority": "Medium",
            "timestamp": "2026-10-19T06:30:00Z",
        },
        {
            "id": "alert-4",
            "title": "Heavy Rain Expected",
            "message": "Postpone fertilizer application until Thursday.",
            "priority": "High",
            "timestamp": "2026-10-19T06:30:00Z",
        },
    ]


class FakeKeyValueCollection:
    """In-memory `key_value_store`; yields to the loop on every call."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}

    async def find_one(self, query):
        await asyncio.sleep(0)
        return self.documents.get(query["_id"])

    async def update_one(self, query, update, upsert=False):
        await asyncio.sleep(0)
        document = self.documents.get(query["_id"])
        if document is None:
            if not upsert:
                return
            document = self.documents[query["_id"]] = {"_id": query["_id"]}
        for field, push in update["$push"].items():
            values = document.setdefault(field, [])
            values.extend(push["$each"])
            for key, direction in push.get("$sort", {}).items():
                values.sort(key=lambda item: item[key], reverse=direction < 0)


@pytest.fixture
def fake_store(monkeypatch):
    store = FakeKeyValueCollection()
    monkeypatch.setattr(
        "krishi_mitra.collections.activity_log.get_key_value_collection",
        lambda: store,
    )
    return store
