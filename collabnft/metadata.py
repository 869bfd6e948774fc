# collabnft/metadata.py
from __future__ import annotations

from collabnft.royalty import allocated_bps
from collabnft.schema import Asset, AssetMetadata, Attribute

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x300.png?text=Collaborative+NFT"


def project(asset: Asset) -> AssetMetadata:
    """Metadata document for an asset snapshot. Pure; never touches stored state."""
    return AssetMetadata(
        name=asset.title,
        description=asset.description,
        image=PLACEHOLDER_IMAGE,
        attributes=[
            Attribute(trait_type="Creator", value=asset.creator),
            Attribute(trait_type="ContributorCount", value=len(asset.contributions)),
            Attribute(trait_type="Status", value="Open" if asset.is_open else "Closed"),
            Attribute(trait_type="RoyaltyBudgetBps", value=asset.royalty_budget_bps),
            Attribute(trait_type="RoyaltyAllocatedBps", value=allocated_bps(asset)),
        ],
    )
