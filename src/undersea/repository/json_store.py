"""JSON-based repository for submarine campaign snapshots."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from undersea.domain import models as dm


class JsonCampaignRepository:
    """Persist campaign snapshots as JSON files on disk."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.CampaignSnapshot] = TypeAdapter(dm.CampaignSnapshot)

    def _path_for(self, campaign_id: dm.CampaignID) -> Path:
        return self.base_path / f"campaign_{int(campaign_id)}.json"

    def save(self, snapshot: dm.CampaignSnapshot) -> Path:
        """Serialize a snapshot to disk and return its path."""

        path = self._path_for(snapshot.id)
        path.write_bytes(self._adapter.dump_json(snapshot, indent=2))
        return path

    def load(self, campaign_id: dm.CampaignID) -> dm.CampaignSnapshot:
        """Load a previously saved snapshot.

        Raises:
            FileNotFoundError: If no snapshot exists for ``campaign_id``
        """

        return self._adapter.validate_json(self._path_for(campaign_id).read_bytes())

    def exists(self, campaign_id: dm.CampaignID) -> bool:
        return self._path_for(campaign_id).exists()

    def list_campaigns(self) -> list[dm.CampaignID]:
        """Return all campaign ids currently persisted in the repository."""

        ids: list[dm.CampaignID] = []
        prefix = "campaign_"
        suffix = ".json"
        for path in self.base_path.glob("campaign_*.json"):
            raw = path.name[len(prefix) : -len(suffix)]
            if raw.isdigit():
                ids.append(dm.CampaignID(int(raw)))
        return sorted(ids, key=int)

    def delete(self, campaign_id: dm.CampaignID) -> None:
        """Remove a snapshot if it exists."""

        path = self._path_for(campaign_id)
        if path.exists():
            path.unlink()
