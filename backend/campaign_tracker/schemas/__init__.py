"""
Pydantic schemas for request/response validation.
"""
from .campaign import (
    CampaignStatus,
    CampaignCreate,
    CampaignDeleteResponse,
    CampaignStats,
    REQUIRED_FIELDS,
)

__all__ = [
    "CampaignStatus", "CampaignCreate", "CampaignDeleteResponse", "CampaignStats",
    "REQUIRED_FIELDS",
]
