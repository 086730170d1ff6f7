"""
Campaigns router for CRUD operations.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..database import CampaignStore, get_store
from ..schemas.campaign import CampaignCreate, CampaignDeleteResponse, CampaignStats
from ..services import campaign_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.get("", response_model=List[Dict[str, Any]])
def list_campaigns(
    status: Optional[str] = Query(None, description="Only campaigns with this status; 'All' disables the filter"),
    search: Optional[str] = Query(None, description="Text matched against campaign and client names"),
    store: CampaignStore = Depends(get_store)
):
    """List all campaigns in insertion order."""
    return campaign_service.list_campaigns(store, status=status, search=search)


@router.get("/stats", response_model=CampaignStats)
def get_campaign_stats(store: CampaignStore = Depends(get_store)):
    """Get the number of campaigns per status."""
    return campaign_service.get_campaign_stats(store)


@router.post("", status_code=201, response_model=Dict[str, Any])
def create_campaign(
    campaign: Optional[CampaignCreate] = None,
    store: CampaignStore = Depends(get_store)
):
    """Create a new campaign."""
    campaign = campaign or CampaignCreate()

    missing = campaign.missing_fields()
    if missing:
        logger.info(f"Rejected campaign creation, missing fields: {missing}")
        raise HTTPException(status_code=400, detail="Missing required fields")

    return campaign_service.create_campaign(store, campaign)


@router.put("/{campaign_id}", response_model=Dict[str, Any])
def update_campaign(
    campaign_id: str,
    updates: Optional[Dict[str, Any]] = Body(None),
    store: CampaignStore = Depends(get_store)
):
    """Merge the given fields into a campaign."""
    campaign = campaign_service.update_campaign(store, campaign_id, updates or {})
    if campaign is None:
        raise HTTPException(status_code=404, detail="Not found")
    return campaign


@router.delete("/{campaign_id}", response_model=CampaignDeleteResponse)
def delete_campaign(
    campaign_id: str,
    store: CampaignStore = Depends(get_store)
):
    """Delete a campaign and return it."""
    removed = campaign_service.delete_campaign(store, campaign_id)
    if removed is None:
        raise HTTPException(status_code=404, detail="Not found")
    return CampaignDeleteResponse(success=True, removed=removed)
