"""
Campaign schemas for API validation.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator


class CampaignStatus(str, Enum):
    """Lifecycle status of a campaign."""
    ACTIVE = "Active"
    PAUSED = "Paused"
    COMPLETED = "Completed"


REQUIRED_FIELDS = ("campaignName", "clientName", "startDate")


class CampaignCreate(BaseModel):
    """
    Schema for creating a new Campaign.

    Required fields are optional here so that a missing value is reported
    as "Missing required fields" instead of a generic validation error.
    """
    campaignName: Optional[str] = None
    clientName: Optional[str] = None
    startDate: Optional[str] = None
    status: Optional[CampaignStatus] = None

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_default(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class CampaignDeleteResponse(BaseModel):
    """Schema for the delete acknowledgement."""
    success: bool = True
    removed: Dict[str, Any]


class CampaignStats(BaseModel):
    """Counts of campaigns per status."""
    total: int = 0
    active: int = 0
    paused: int = 0
    completed: int = 0
