"""
Read-only tweet list with per-row delete callbacks.

Rows are resolved against their author by id. An unknown author renders
with no avatar and an empty initial instead of failing. Deleting a tweet
and refreshing the list is the caller's job; this view does no I/O.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..layout import ResponsiveLayout
from ..models import SubmittedTweet, User

# Length of "twitter.com/" plus the first characters of a screen name,
# hidden on compact layouts.
MOBILE_LINK_OFFSET = 20


@dataclass
class TweetRow:
    """One rendered tweet."""
    tweet_id: str
    author_id: str
    screen_name: Optional[str]
    avatar_url: Optional[str]
    initial: str
    link: str
    href: str
    link_text: str
    on_delete: Callable[[str], None]

    def delete(self) -> None:
        self.on_delete(self.tweet_id)


def tweet_link(tweet_id: str, screen_name: Optional[str]) -> str:
    """Link without scheme; ``i`` stands in for an unknown author."""
    return f"twitter.com/{screen_name or 'i'}/status/{tweet_id}"


class TweetList:
    """Builds tweet rows for display."""

    def __init__(self, on_delete: Callable[[str], None], layout: ResponsiveLayout):
        self.on_delete = on_delete
        self.layout = layout

    def render(self, tweets: Sequence[SubmittedTweet], users: Sequence[User]) -> list[TweetRow]:
        """
        Resolve every tweet against its author.

        Returns:
            One row per tweet in input order; empty input gives no rows
        """
        if not tweets:
            return []

        users_by_id = {user.id: user for user in users}
        is_mobile = self.layout.is_mobile()

        rows = []
        for tweet in tweets:
            author = users_by_id.get(tweet.author_id)
            screen_name = author.screen_name if author else None
            link = tweet_link(tweet.id, screen_name)
            rows.append(TweetRow(
                tweet_id=tweet.id,
                author_id=tweet.author_id,
                screen_name=screen_name,
                avatar_url=author.image if author else None,
                initial=screen_name[:1].upper() if screen_name else "",
                link=link,
                href=f"https://{link}",
                link_text=f"...{link[MOBILE_LINK_OFFSET:]}" if is_mobile else link,
                on_delete=self.on_delete,
            ))
        return rows
