"""
Transport layer for the campaigns API.
"""

from .http import (
    HTTP_CREATED,
    CampaignApiError,
    CampaignTransport,
    MutationResult,
)

__all__ = [
    "HTTP_CREATED",
    "CampaignApiError",
    "CampaignTransport",
    "MutationResult",
]
