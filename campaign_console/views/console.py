"""Rich renderers for the campaign and tweet views."""

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .campaign_list import CampaignListView, ListStatus
from .tweet_list import TweetRow


def render_campaign_list(view: CampaignListView, console: Optional[Console] = None) -> None:
    """Print the campaign list section."""
    console = console or Console()

    header = f"[bold]{view.title}[/bold] [cyan]({view.badge_count})[/cyan]"
    if view.search_text:
        header += f"  search: [yellow]{view.search_text}[/yellow]"

    if view.status == ListStatus.LOADING:
        console.print(Panel("[dim]Loading...[/dim]", title=header))
        return

    if view.status == ListStatus.EMPTY:
        console.print(Panel(view.empty_text, title=header))
        return

    table = Table(title=header)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Influencers", justify="right")
    table.add_column("Managers", justify="right")

    for campaign in view.campaigns:
        table.add_row(
            str(campaign.id or "-"),
            campaign.name,
            str(len(campaign.influencers or [])),
            str(len(campaign.managers or [])),
        )

    console.print(table)


def render_tweets(rows: Sequence[TweetRow], console: Optional[Console] = None) -> None:
    """Print tweet rows; prints nothing for an empty list."""
    if not rows:
        return
    console = console or Console()

    table = Table(show_header=False, box=None)
    table.add_column("Author", style="bold")
    table.add_column("Link")

    for row in rows:
        table.add_row(row.initial or "?", f"[link={row.href}]{row.link_text}[/link]")

    console.print(table)
