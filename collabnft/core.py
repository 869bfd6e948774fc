# collabnft/core.py
from __future__ import annotations

from typing import List, Optional, Union

from collabnft import metadata
from collabnft.approval import ApprovalConfig, ApprovalEngine
from collabnft.ledger import ContributionLedger
from collabnft.registry import AssetRegistry
from collabnft.royalty import RoyaltyDistributor
from collabnft.schema import (
    Asset,
    AssetMetadata,
    Contribution,
    RoyaltySplit,
    RoyaltyStatus,
    VoteDirection,
)
from collabnft.settings import Settings, get_settings
from collabnft.store import MemoryStore


class CollabCore:
    """
    Synchronous API surface over one in-memory store.

    Every method either returns a detached snapshot or raises a CollabError
    before changing anything.
    """

    def __init__(
        self,
        cfg: Optional[ApprovalConfig] = None,
        *,
        public_base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.store = MemoryStore()
        self.registry = AssetRegistry(
            self.store,
            public_base_url=settings.public_base_url if public_base_url is None else public_base_url,
        )
        self.ledger = ContributionLedger(self.store)
        self.royalties = RoyaltyDistributor(self.store)
        self.approvals = ApprovalEngine(self.store, cfg or ApprovalConfig.from_settings(settings))

    # ---------- assets ----------

    def mint(self, creator: str, title: str, description: str, royalty_budget_bps: int) -> Asset:
        return self.registry.mint(creator, title, description, royalty_budget_bps)

    def get_asset(self, asset_id: int) -> Asset:
        return self.registry.get(asset_id)

    def list_assets(self) -> List[Asset]:
        return self.registry.list_assets()

    def close_asset(self, asset_id: int) -> None:
        self.registry.close(asset_id)

    # ---------- contributions ----------

    def request_contribution(
        self,
        asset_id: int,
        contributor: str,
        kind: str,
        requested_share_bps: int,
        content_uri: Optional[str] = None,
    ) -> Contribution:
        return self.ledger.request_contribution(
            asset_id, contributor, kind, requested_share_bps, content_uri=content_uri
        )

    def list_contributions(self, asset_id: int) -> List[Contribution]:
        return self.ledger.list(asset_id)

    def get_contribution(self, contribution_id: int) -> Contribution:
        return self.ledger.get(contribution_id)

    def vote(self, contribution_id: int, voter: str, direction: Union[VoteDirection, str]) -> Contribution:
        return self.approvals.vote(contribution_id, voter, direction)

    # ---------- royalties ----------

    def allocated_bps(self, asset_id: int) -> int:
        return self.royalties.allocated_bps(asset_id)

    def remaining_budget(self, asset_id: int) -> int:
        return self.royalties.remaining_budget(asset_id)

    def can_accommodate(self, asset_id: int, share_bps: int) -> bool:
        return self.royalties.can_accommodate(asset_id, share_bps)

    def royalty_split(self, asset_id: int, amount: int) -> RoyaltySplit:
        return self.royalties.split_preview(asset_id, amount)

    def royalty_status(self, asset_id: int, amount: Optional[int] = None) -> RoyaltyStatus:
        return self.royalties.status(asset_id, amount)

    # ---------- read-side ----------

    def metadata_projection(self, asset_id: int) -> AssetMetadata:
        return metadata.project(self.store.snapshot(asset_id))
