"""
Campaign operations on top of the JSON store.

Each write operation holds the store lock for its full
read-modify-write cycle.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..database import CampaignStore
from ..schemas.campaign import CampaignCreate, CampaignStats, CampaignStatus

logger = logging.getLogger(__name__)

# Fields assigned by the server that an update body can still overwrite
SERVER_MANAGED_FIELDS = ("id", "createdAt")

ALL_STATUSES = "All"


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with a trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _find_index(campaigns: List[Dict[str, Any]], campaign_id: str) -> int:
    for index, campaign in enumerate(campaigns):
        if campaign.get("id") == campaign_id:
            return index
    return -1


def list_campaigns(
    store: CampaignStore,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Return campaigns in stored order.

    Args:
        store: The campaign store
        status: Keep only campaigns with this status ("All" keeps every one)
        search: Case-insensitive text matched against campaign and client names
    """
    campaigns = store.load_all()

    if status and status != ALL_STATUSES:
        campaigns = [c for c in campaigns if c.get("status") == status]

    if search:
        needle = search.lower()
        campaigns = [
            c for c in campaigns
            if needle in f"{c.get('campaignName', '')} {c.get('clientName', '')}".lower()
        ]

    return campaigns


def create_campaign(store: CampaignStore, data: CampaignCreate) -> Dict[str, Any]:
    """Append a new campaign. Required fields must already be validated."""
    campaign = {
        "id": store.generate_id(),
        "campaignName": data.campaignName,
        "clientName": data.clientName,
        "startDate": data.startDate,
        "status": (data.status or CampaignStatus.ACTIVE).value,
        "createdAt": utc_now_iso(),
    }

    with store.lock:
        campaigns = store.load_all()
        campaigns.append(campaign)
        store.save_all(campaigns)

    logger.info(f"Created campaign {campaign['id']} ({campaign['campaignName']})")
    return campaign


def update_campaign(
    store: CampaignStore,
    campaign_id: str,
    updates: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Overlay the given fields onto a campaign and refresh updatedAt.

    The merge is shallow and accepts any field, including id and
    createdAt. Returns None when no campaign has the given id.
    """
    with store.lock:
        campaigns = store.load_all()
        index = _find_index(campaigns, campaign_id)
        if index == -1:
            return None

        overwritten = [name for name in SERVER_MANAGED_FIELDS if name in updates]
        if overwritten:
            logger.warning(f"Update of campaign {campaign_id} overwrites server-managed fields: {overwritten}")

        campaigns[index] = {**campaigns[index], **updates, "updatedAt": utc_now_iso()}
        store.save_all(campaigns)

    logger.info(f"Updated campaign {campaign_id}")
    return campaigns[index]


def delete_campaign(store: CampaignStore, campaign_id: str) -> Optional[Dict[str, Any]]:
    """Remove a campaign. Returns the removed record, or None if not found."""
    with store.lock:
        campaigns = store.load_all()
        index = _find_index(campaigns, campaign_id)
        if index == -1:
            return None

        removed = campaigns.pop(index)
        store.save_all(campaigns)

    logger.info(f"Deleted campaign {campaign_id}")
    return removed


def get_campaign_stats(store: CampaignStore) -> CampaignStats:
    """Count campaigns per status."""
    campaigns = store.load_all()
    statuses = [c.get("status") for c in campaigns]

    return CampaignStats(
        total=len(campaigns),
        active=statuses.count(CampaignStatus.ACTIVE.value),
        paused=statuses.count(CampaignStatus.PAUSED.value),
        completed=statuses.count(CampaignStatus.COMPLETED.value),
    )
