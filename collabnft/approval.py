# collabnft/approval.py
from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import BaseModel, Field

from collabnft import royalty
from collabnft.errors import AlreadyFinalized, DuplicateVote, NotFound, SelfVoteForbidden
from collabnft.schema import (
    Asset,
    Contribution,
    ContributionStatus,
    RejectionReason,
    VoteDirection,
    VoteRequest,
    validated,
)
from collabnft.settings import Settings
from collabnft.store import MemoryStore

logger = logging.getLogger(__name__)


class ApprovalConfig(BaseModel):
    approval_threshold: int = Field(default=3, ge=1)
    minimum_votes: int = Field(default=3, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApprovalConfig":
        return cls(
            approval_threshold=settings.approval_threshold,
            minimum_votes=settings.minimum_votes,
        )


# ----------------------------
# Finalization rule
# ----------------------------

def finalize(asset: Asset, contribution: Contribution, cfg: ApprovalConfig) -> Optional[ContributionStatus]:
    """
    Apply the finalization rule to a pending contribution of `asset` (caller holds the asset lock):
      - approve when up - down >= threshold and up >= minimum_votes, if the share fits the budget
      - otherwise reject with reason royalty_budget_exceeded
      - reject when down - up >= threshold
    Returns the terminal status reached, or None if still pending.
    """
    margin = contribution.votes_up - contribution.votes_down

    if margin >= cfg.approval_threshold and contribution.votes_up >= cfg.minimum_votes:
        if royalty.can_accommodate(asset, contribution.requested_share_bps):
            contribution.status = ContributionStatus.approved
        else:
            contribution.status = ContributionStatus.rejected
            contribution.rejection_reason = RejectionReason.royalty_budget_exceeded
            logger.warning(
                "contribution %s on asset %s approved by votes but refused: %sbps requested, %sbps remaining",
                contribution.id, asset.id, contribution.requested_share_bps, royalty.remaining_budget(asset),
            )
    elif -margin >= cfg.approval_threshold:
        contribution.status = ContributionStatus.rejected
        contribution.rejection_reason = RejectionReason.votes

    if not contribution.is_final:
        return None

    royalty.check_budget(asset)
    logger.info(
        "contribution %s on asset %s finalized as %s (+%s/-%s)",
        contribution.id, asset.id, contribution.status.value, contribution.votes_up, contribution.votes_down,
    )
    return contribution.status


class ApprovalEngine:
    """Tallies votes and finalizes contributions."""

    def __init__(self, store: MemoryStore, cfg: Optional[ApprovalConfig] = None) -> None:
        self.store = store
        self.cfg = cfg or ApprovalConfig()

    def vote(self, contribution_id: int, voter: str, direction: Union[VoteDirection, str]) -> Contribution:
        asset_id = self.store.owner_of(contribution_id)
        with self.store.locked(asset_id) as asset:
            contribution = next((c for c in asset.contributions if c.id == contribution_id), None)
            if contribution is None:
                raise NotFound(f"contribution {contribution_id} not found")

            req = validated(VoteRequest, voter=voter, direction=direction)

            if req.voter == contribution.contributor:
                raise SelfVoteForbidden(f"{req.voter} cannot vote on their own contribution")
            if contribution.is_final:
                raise AlreadyFinalized(
                    f"contribution {contribution_id} is already {contribution.status.value}"
                )
            if req.voter in contribution.voters_seen:
                raise DuplicateVote(f"{req.voter} already voted on contribution {contribution_id}")

            if req.direction == VoteDirection.up:
                contribution.votes_up += 1
            else:
                contribution.votes_down += 1
            contribution.voters_seen.add(req.voter)
            logger.debug("vote %s on contribution %s by %s", req.direction.value, contribution_id, req.voter)

            finalize(asset, contribution, self.cfg)
            return contribution.model_copy(deep=True)
