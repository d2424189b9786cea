"""Shared pytest fixtures and configuration."""

import asyncio
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from campaign_console.cache import CacheBinding
from campaign_console.controller import ResourceListController
from campaign_console.i18n import CatalogTranslator
from campaign_console.layout import ViewportLayout
from campaign_console.models import Campaign
from campaign_console.notifications import InMemoryNotificationSink
from campaign_console.transport import MutationResult


SAMPLE_CAMPAIGNS = [
    {
        "_id": "camp-001",
        "name": "Summer Launch",
        "influencers": [
            {"id": "inf-1", "name": "Ada", "image": "https://img.example/ada.png"},
            {"id": "inf-2", "name": "Grace", "followers": 12000},
        ],
        "managers": [{"id": "mgr-1", "email": "lead@example.com"}],
        "budget": 5000,
    },
    {
        "_id": "camp-002",
        "name": "Winter Sale",
        "influencers": [],
        "managers": [{"id": "mgr-2", "email": "ops@example.com"}],
    },
    {
        "_id": "camp-003",
        "name": "Summer Giveaway",
        "influencers": [{"id": "inf-3", "name": "Linus"}],
        "managers": [],
    },
]


class FakeCampaignApi:
    """
    Scriptable stand-in for the campaigns API.

    Reads filter SAMPLE_CAMPAIGNS by the search text in the key. Mutations
    return the configured results; setting ``gate`` holds them until the
    event is set.
    """

    def __init__(self, campaigns: Optional[list[dict]] = None):
        self.campaigns = list(campaigns if campaigns is not None else SAMPLE_CAMPAIGNS)
        self.fetches: list[str] = []
        self.saves: list[dict] = []
        self.deletes: list[str] = []
        self.save_result = MutationResult(ok=True, status=201)
        self.delete_result = MutationResult(ok=True, status=200)
        self.gate: Optional[asyncio.Event] = None

    async def fetch_campaigns(self, key: str) -> list[Campaign]:
        self.fetches.append(key)
        await asyncio.sleep(0)
        search = parse_qs(urlsplit(key).query).get("search", [""])[0].lower()
        return [
            Campaign.model_validate(c)
            for c in self.campaigns
            if search in c["name"].lower()
        ]

    async def save_campaign(self, payload: dict) -> MutationResult:
        self.saves.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        return self.save_result

    async def delete_campaign(self, campaign_id: str) -> MutationResult:
        self.deletes.append(campaign_id)
        if self.gate is not None:
            await self.gate.wait()
        return self.delete_result


@pytest.fixture
def sample_campaigns():
    """Raw campaign payloads as the API returns them."""
    return [dict(c) for c in SAMPLE_CAMPAIGNS]


@pytest.fixture
def api():
    return FakeCampaignApi()


@pytest.fixture
def notifier():
    return InMemoryNotificationSink()


@pytest.fixture
def translator():
    return CatalogTranslator()


@pytest.fixture
def desktop_layout():
    return ViewportLayout(1280)


@pytest.fixture
def mobile_layout():
    return ViewportLayout(375)


@pytest.fixture
def controller(api, notifier, translator, desktop_layout):
    """Controller wired to the fake API."""
    return ResourceListController(
        cache=CacheBinding(api.fetch_campaigns, name="campaigns"),
        mutations=api,
        notifier=notifier,
        translator=translator,
        layout=desktop_layout,
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a running campaigns API"
    )
