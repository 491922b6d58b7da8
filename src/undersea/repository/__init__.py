"""Persistence adapters for campaign snapshots."""

from undersea.repository.json_store import JsonCampaignRepository

__all__ = ["JsonCampaignRepository"]
