# collabnft/registry.py
from __future__ import annotations

import logging
from typing import List

from collabnft.schema import Asset, MintRequest, validated
from collabnft.store import MemoryStore

logger = logging.getLogger(__name__)


class AssetRegistry:
    """Mints collaborative assets and owns their open/closed lifecycle."""

    def __init__(self, store: MemoryStore, public_base_url: str = "") -> None:
        self.store = store
        self.public_base_url = public_base_url.rstrip("/")

    def metadata_uri(self, asset_id: int) -> str:
        return f"{self.public_base_url}/api/metadata/{asset_id}"

    def mint(self, creator: str, title: str, description: str, royalty_budget_bps: int) -> Asset:
        """
        Create an open asset with no contributions.
        Validation runs before an id is drawn, so a rejected mint consumes nothing.
        """
        req = validated(
            MintRequest,
            creator=creator,
            title=title,
            description=description,
            royalty_budget_bps=royalty_budget_bps,
        )
        asset_id = self.store.next_asset_id()
        asset = Asset(
            id=asset_id,
            creator=req.creator,
            title=req.title,
            description=req.description,
            royalty_budget_bps=req.royalty_budget_bps,
            metadata_uri=self.metadata_uri(asset_id),
        )
        self.store.add_asset(asset)
        logger.info("minted asset %s for %s (budget=%sbps)", asset_id, req.creator, req.royalty_budget_bps)
        return asset.model_copy(deep=True)

    def get(self, asset_id: int) -> Asset:
        return self.store.snapshot(asset_id)

    def list_assets(self) -> List[Asset]:
        return self.store.snapshots()

    def close(self, asset_id: int) -> None:
        """Stop accepting contribution requests. Closing twice is a no-op."""
        with self.store.locked(asset_id) as asset:
            if not asset.is_open:
                return
            asset.is_open = False
        logger.info("closed asset %s", asset_id)
