# collabnft/royalty.py
from __future__ import annotations

from typing import Iterable, List, Optional

from collabnft.errors import InvalidInput, InvariantViolation
from collabnft.schema import (
    MAX_BPS,
    Asset,
    Contribution,
    ContributionStatus,
    RoyaltyShare,
    RoyaltySplit,
    RoyaltyStatus,
)
from collabnft.store import MemoryStore

# ----------------------------
# Pure folds over an asset snapshot
# ----------------------------

def approved(contributions: Iterable[Contribution]) -> List[Contribution]:
    return [c for c in contributions if c.status == ContributionStatus.approved]


def allocated_bps(asset: Asset) -> int:
    """Sum of requested shares over approved contributions."""
    return sum(c.requested_share_bps for c in approved(asset.contributions))


def remaining_budget(asset: Asset) -> int:
    return asset.royalty_budget_bps - allocated_bps(asset)


def can_accommodate(asset: Asset, share_bps: int) -> bool:
    return share_bps <= remaining_budget(asset)


def check_budget(asset: Asset) -> None:
    """Raise InvariantViolation if approved shares ever exceed the budget."""
    alloc = allocated_bps(asset)
    if alloc > asset.royalty_budget_bps:
        raise InvariantViolation(
            f"asset {asset.id}: allocated {alloc}bps exceeds budget {asset.royalty_budget_bps}bps"
        )


def split(asset: Asset, amount: int) -> RoyaltySplit:
    """
    Split `amount` of proceeds (integer minor units):
      - each approved contributor gets floor(amount * share / 10000)
      - the creator keeps whatever is left, including rounding dust
    """
    shares = [
        RoyaltyShare(
            contribution_id=c.id,
            contributor=c.contributor,
            share_bps=c.requested_share_bps,
            amount=amount * c.requested_share_bps // MAX_BPS,
        )
        for c in approved(asset.contributions)
    ]
    return RoyaltySplit(
        asset_id=asset.id,
        amount=amount,
        royalty_budget_bps=asset.royalty_budget_bps,
        allocated_bps=sum(s.share_bps for s in shares),
        shares=shares,
        creator_amount=amount - sum(s.amount for s in shares),
    )


# ----------------------------
# Store-backed distributor
# ----------------------------

class RoyaltyDistributor:
    """Read-only royalty accounting by asset id, each answer from one consistent snapshot."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def allocated_bps(self, asset_id: int) -> int:
        return allocated_bps(self.store.snapshot(asset_id))

    def remaining_budget(self, asset_id: int) -> int:
        return remaining_budget(self.store.snapshot(asset_id))

    def can_accommodate(self, asset_id: int, share_bps: int) -> bool:
        return can_accommodate(self.store.snapshot(asset_id), share_bps)

    def split_preview(self, asset_id: int, amount: int) -> RoyaltySplit:
        asset = self.store.snapshot(asset_id)
        _check_amount(amount)
        return split(asset, amount)

    def status(self, asset_id: int, amount: Optional[int] = None) -> RoyaltyStatus:
        """Budget, allocation and (when `amount` is given) the split, all from one snapshot."""
        asset = self.store.snapshot(asset_id)
        if amount is not None:
            _check_amount(amount)
        alloc = allocated_bps(asset)
        return RoyaltyStatus(
            asset_id=asset.id,
            royalty_budget_bps=asset.royalty_budget_bps,
            allocated_bps=alloc,
            remaining_bps=asset.royalty_budget_bps - alloc,
            split=split(asset, amount) if amount is not None else None,
        )


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidInput(f"amount must be a non-negative integer, got {amount!r}")
