"""
Business logic services.
"""
from .campaign_service import (
    list_campaigns,
    create_campaign,
    update_campaign,
    delete_campaign,
    get_campaign_stats,
)

__all__ = [
    "list_campaigns",
    "create_campaign",
    "update_campaign",
    "delete_campaign",
    "get_campaign_stats",
]
