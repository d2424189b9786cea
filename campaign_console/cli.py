"""
Campaign Console CLI

Usage:
    campaign-console list --search summer
    campaign-console save campaign.json
    campaign-console delete 64f0c2a9e1
    campaign-console tweets tweets.json --delete 1234567890
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from .cache import CacheBinding
from .config import ConsoleSettings, get_settings
from .console_logging import configure_logging
from .controller import ResourceListController
from .i18n import CatalogTranslator
from .layout import ViewportLayout
from .models import Campaign, SubmittedTweet, User
from .notifications import ConsoleNotificationSink, NotificationSink
from .transport import CampaignTransport
from .views import TweetList, render_campaign_list, render_tweets

app = typer.Typer(
    name="campaign-console",
    help="Search, create, edit and delete campaigns from the terminal",
    add_completion=False,
)
console = Console()
logger = structlog.get_logger()


def build_controller(
    settings: ConsoleSettings,
    transport: CampaignTransport,
    notifier: NotificationSink,
) -> ResourceListController:
    """Wire a controller to a transport and the configured collaborators."""
    return ResourceListController(
        cache=CacheBinding(
            transport.fetch_campaigns,
            name="campaigns",
            max_entries=settings.cache_max_entries,
        ),
        mutations=transport,
        notifier=notifier,
        translator=CatalogTranslator(locale=settings.locale),
        layout=ViewportLayout(settings.viewport_width),
        endpoint=settings.campaigns_endpoint,
        mobile_breakpoint=settings.mobile_breakpoint,
    )


def _transport(settings: ConsoleSettings) -> CampaignTransport:
    return CampaignTransport(
        base_url=settings.api_base_url,
        endpoint=settings.campaigns_endpoint,
        timeout=settings.request_timeout,
    )


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (default from settings)"),
    log_json: bool = typer.Option(False, "--log-json", help="Emit JSON log lines"),
):
    """Campaign console."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, json_output=log_json or settings.log_json)


@app.command("list")
def list_campaigns(
    search: str = typer.Option("", help="Search text"),
):
    """List campaigns matching a search."""
    settings = get_settings()

    async def _run() -> bool:
        async with _transport(settings) as transport:
            controller = build_controller(settings, transport, ConsoleNotificationSink(console))
            controller.set_search_text(search)
            entry = await controller.load()
            render_campaign_list(controller.view(), console)
            return entry.error is None

    if not asyncio.run(_run()):
        console.print("[red]Could not load campaigns[/red]")
        raise typer.Exit(code=1)


@app.command()
def save(
    path: Path = typer.Argument(..., help="JSON file with the campaign"),
    search: str = typer.Option("", help="Search text for the refreshed list"),
):
    """Create a campaign (no id) or update one (with id)."""
    settings = get_settings()
    try:
        campaign = Campaign.model_validate(_read_json(path))
    except ValidationError as e:
        console.print(f"[red]Invalid campaign: {e}[/red]")
        raise typer.Exit(code=1)

    async def _run() -> bool:
        async with _transport(settings) as transport:
            controller = build_controller(settings, transport, ConsoleNotificationSink(console))
            controller.set_search_text(search)
            await controller.load()
            if campaign.is_new:
                controller.open_create()
            else:
                controller.open_edit(campaign)
            ok = await controller.save(campaign)
            render_campaign_list(controller.view(), console)
            return ok

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def delete(
    campaign_id: str = typer.Argument(..., help="Campaign id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a campaign by id."""
    settings = get_settings()

    async def _run() -> bool:
        async with _transport(settings) as transport:
            controller = build_controller(settings, transport, ConsoleNotificationSink(console))
            entry = await controller.load()
            target = next((c for c in entry.data or [] if c.id == campaign_id), None)
            if target is None:
                console.print(f"[red]Campaign {campaign_id} not found[/red]")
                return False

            controller.open_delete(target)
            dialog = controller.view().dialog
            if not yes and not typer.confirm(dialog.title):
                controller.close_dialog()
                return True

            ok = await controller.confirm_delete()
            render_campaign_list(controller.view(), console)
            return ok

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def tweets(
    path: Path = typer.Argument(..., help='JSON file: {"tweets": [...], "users": [...]}'),
    delete_id: Optional[str] = typer.Option(None, "--delete", help="Tweet id to remove from the file"),
):
    """Show submitted tweets, optionally removing one."""
    settings = get_settings()
    data = _read_json(path)
    try:
        tweet_items = [SubmittedTweet.model_validate(t) for t in data.get("tweets", [])]
        users = [User.model_validate(u) for u in data.get("users", [])]
    except (AttributeError, ValidationError) as e:
        console.print(f"[red]Invalid tweets file: {e}[/red]")
        raise typer.Exit(code=1)

    def remove_tweet(tweet_id: str) -> None:
        data["tweets"] = [t for t in data.get("tweets", []) if t.get("id") != tweet_id]
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info("tweets.deleted", tweet_id=tweet_id, path=str(path))

    tweet_list = TweetList(on_delete=remove_tweet, layout=ViewportLayout(settings.viewport_width))
    rows = tweet_list.render(tweet_items, users)

    if delete_id is not None:
        row = next((r for r in rows if r.tweet_id == delete_id), None)
        if row is None:
            console.print(f"[red]Tweet {delete_id} not found[/red]")
            raise typer.Exit(code=1)
        row.delete()
        rows = tweet_list.render([t for t in tweet_items if t.id != delete_id], users)

    render_tweets(rows, console)


if __name__ == "__main__":
    app()
