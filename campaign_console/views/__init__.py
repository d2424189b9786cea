"""
View models and console renderers.
"""

from .campaign_list import (
    CampaignListView,
    DialogView,
    ListStatus,
    SearchAdornment,
    build_campaign_list_view,
)
from .tweet_list import (
    TweetList,
    TweetRow,
    tweet_link,
)
from .console import (
    render_campaign_list,
    render_tweets,
)

__all__ = [
    # Campaign list
    "CampaignListView",
    "DialogView",
    "ListStatus",
    "SearchAdornment",
    "build_campaign_list_view",
    # Tweets
    "TweetList",
    "TweetRow",
    "tweet_link",
    # Rendering
    "render_campaign_list",
    "render_tweets",
]
