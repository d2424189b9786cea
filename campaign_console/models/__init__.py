"""
Data models for campaigns and their social content.
"""

from .campaign import (
    RELATION_FIELDS,
    Campaign,
    Ref,
    to_save_payload,
)
from .social import (
    SubmittedTweet,
    User,
)

__all__ = [
    # Campaigns
    "Campaign",
    "Ref",
    "RELATION_FIELDS",
    "to_save_payload",
    # Social
    "SubmittedTweet",
    "User",
]
