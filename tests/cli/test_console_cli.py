"""Tests for the campaign console CLI against a mocked API."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from campaign_console import cli
from campaign_console.config import ConsoleSettings
from campaign_console.notifications import InMemoryNotificationSink
from campaign_console.transport import CampaignTransport


class FakeCampaignServer:
    """In-memory campaigns API served through httpx.MockTransport."""

    def __init__(self, campaigns: list[dict]):
        self.campaigns = {c["_id"]: dict(c) for c in campaigns}
        self.fail_reads = False
        self._next_id = 100

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            if self.fail_reads:
                return httpx.Response(500, text="down")
            search = request.url.params.get("search", "").lower()
            return httpx.Response(
                200,
                json=[c for c in self.campaigns.values() if search in c["name"].lower()],
            )

        if request.method == "POST":
            body = json.loads(request.content)
            if "id" in body and body["id"] in self.campaigns:
                self.campaigns[body["id"]].update(body)
                return httpx.Response(200)
            self._next_id += 1
            new_id = f"camp-{self._next_id}"
            self.campaigns[new_id] = {**body, "_id": new_id}
            return httpx.Response(201)

        if request.method == "DELETE":
            campaign_id = request.url.path.rsplit("/", 1)[-1]
            if self.campaigns.pop(campaign_id, None) is None:
                return httpx.Response(404)
            return httpx.Response(200)

        return httpx.Response(405)


@pytest.fixture
def server(sample_campaigns):
    return FakeCampaignServer(sample_campaigns)


@pytest.fixture
def runner(server, monkeypatch):
    def fake_transport(settings):
        return CampaignTransport(
            base_url="http://api.test",
            endpoint=settings.campaigns_endpoint,
            transport=httpx.MockTransport(server.handler),
        )

    monkeypatch.setattr(cli, "_transport", fake_transport)
    return CliRunner()


class TestListCommand:
    """campaign-console list"""

    def test_lists_all(self, runner):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "list"])

        assert result.exit_code == 0
        assert "Summer Launch" in result.output
        assert "Winter Sale" in result.output
        assert "(3)" in result.output

    def test_search(self, runner):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "list", "--search", "summer"])

        assert result.exit_code == 0
        assert "Summer Giveaway" in result.output
        assert "Winter Sale" not in result.output

    def test_read_failure_exits_nonzero(self, runner, server):
        server.fail_reads = True

        result = runner.invoke(cli.app, ["--log-level", "WARNING", "list"])

        assert result.exit_code == 1
        assert "Could not load campaigns" in result.output


class TestSaveCommand:
    """campaign-console save"""

    def test_create(self, runner, server, tmp_path):
        path = tmp_path / "campaign.json"
        path.write_text(json.dumps({
            "name": "Autumn Push",
            "influencers": [{"id": "inf-9", "name": "Someone", "image": "x.png"}],
        }))

        result = runner.invoke(cli.app, ["--log-level", "WARNING", "save", str(path)])

        assert result.exit_code == 0
        assert "New campaign added" in result.output
        created = [c for c in server.campaigns.values() if c["name"] == "Autumn Push"][0]
        assert created["influencers"] == [{"id": "inf-9"}]
        assert "Autumn Push" in result.output

    def test_update(self, runner, server, tmp_path):
        path = tmp_path / "campaign.json"
        path.write_text(json.dumps({"id": "camp-002", "name": "Winter Clearance"}))

        result = runner.invoke(cli.app, ["--log-level", "WARNING", "save", str(path)])

        assert result.exit_code == 0
        assert "Campaign updated" in result.output
        assert server.campaigns["camp-002"]["name"] == "Winter Clearance"

    def test_invalid_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(cli.app, ["--log-level", "WARNING", "save", str(path)])

        assert result.exit_code == 1


class TestDeleteCommand:
    """campaign-console delete"""

    def test_delete_with_yes(self, runner, server):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "delete", "camp-002", "--yes"])

        assert result.exit_code == 0
        assert "Campaign deleted" in result.output
        assert "camp-002" not in server.campaigns

    def test_delete_declined(self, runner, server):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "delete", "camp-002"], input="n\n")

        assert result.exit_code == 0
        assert "camp-002" in server.campaigns

    def test_unknown_id(self, runner):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "delete", "nope", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestTweetsCommand:
    """campaign-console tweets"""

    @pytest.fixture
    def tweets_file(self, tmp_path):
        path = tmp_path / "tweets.json"
        path.write_text(json.dumps({
            "tweets": [
                {"id": "100", "authorId": "u1"},
                {"id": "200", "authorId": "ghost"},
            ],
            "users": [{"id": "u1", "screenName": "ada"}],
        }))
        return path

    def test_renders_links(self, runner, tweets_file):
        result = runner.invoke(cli.app, ["--log-level", "WARNING", "tweets", str(tweets_file)])

        assert result.exit_code == 0
        assert "twitter.com/ada/status/100" in result.output
        assert "twitter.com/i/status/200" in result.output

    def test_delete_rewrites_file(self, runner, tweets_file):
        result = runner.invoke(
            cli.app, ["--log-level", "WARNING", "tweets", str(tweets_file), "--delete", "100"]
        )

        assert result.exit_code == 0
        data = json.loads(tweets_file.read_text())
        assert [t["id"] for t in data["tweets"]] == ["200"]
        assert "status/100" not in result.output


class TestBuildController:
    """Wiring from settings."""

    def test_cache_bound_from_settings(self):
        settings = ConsoleSettings(_env_file=None, cache_max_entries=5)
        transport = cli._transport(settings)

        controller = cli.build_controller(settings, transport, InMemoryNotificationSink())

        assert controller.cache.max_entries == 5
        assert controller.endpoint == "/api/campaigns"
