# collabnft/ledger.py
from __future__ import annotations

import logging
from typing import List, Optional

from collabnft.errors import AssetClosed, DuplicatePending, NotFound
from collabnft.schema import Contribution, ContributionRequest, ContributionStatus, validated
from collabnft.store import MemoryStore

logger = logging.getLogger(__name__)


class ContributionLedger:
    """Records contribution requests against assets."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def request_contribution(
        self,
        asset_id: int,
        contributor: str,
        kind: str,
        requested_share_bps: int,
        content_uri: Optional[str] = None,
    ) -> Contribution:
        """
        Append a pending contribution to the asset.
        Checked in order: unknown asset, closed asset, bad input, same
        contributor already waiting on a contribution of the same kind.
        """
        with self.store.locked(asset_id) as asset:
            if not asset.is_open:
                raise AssetClosed(f"asset {asset_id} is closed to new contributions")

            req = validated(
                ContributionRequest,
                contributor=contributor,
                kind=kind,
                requested_share_bps=requested_share_bps,
                content_uri=content_uri,
            )

            for c in asset.contributions:
                if (
                    c.status == ContributionStatus.pending
                    and c.contributor == req.contributor
                    and c.kind == req.kind
                ):
                    raise DuplicatePending(
                        f"{req.contributor} already has a pending '{req.kind}' contribution "
                        f"(id={c.id}) on asset {asset_id}"
                    )

            contribution = Contribution(
                id=self.store.next_contribution_id(),
                asset_id=asset_id,
                contributor=req.contributor,
                kind=req.kind,
                requested_share_bps=req.requested_share_bps,
                content_uri=req.content_uri,
            )
            asset.contributions.append(contribution)
            self.store.index_contribution(contribution.id, asset_id)
            logger.info(
                "contribution %s requested on asset %s by %s (%s, %sbps)",
                contribution.id, asset_id, req.contributor, req.kind, req.requested_share_bps,
            )
            return contribution.model_copy(deep=True)

    def list(self, asset_id: int) -> List[Contribution]:
        return self.store.snapshot(asset_id).contributions

    def get(self, contribution_id: int) -> Contribution:
        asset_id = self.store.owner_of(contribution_id)
        for c in self.store.snapshot(asset_id).contributions:
            if c.id == contribution_id:
                return c
        raise NotFound(f"contribution {contribution_id} not found")
