# collabnft/schema.py
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Set, Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from collabnft.errors import InvalidInput

MAX_BPS = 10000

M = TypeVar("M", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------
# Enums (wire-safe)
# -------------------------

class ContributionStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class VoteDirection(str, Enum):
    up = "up"
    down = "down"


class RejectionReason(str, Enum):
    votes = "votes"                                      # down votes crossed the threshold
    royalty_budget_exceeded = "royalty_budget_exceeded"  # approved by votes, but share did not fit


# -------------------------
# Core state models
# -------------------------

class Contribution(BaseModel):
    """A proposed addition to an asset, carrying a requested royalty share."""
    id: int = Field(ge=1)
    asset_id: int = Field(ge=1)
    contributor: str
    kind: str                     # art, lyrics, code, promotion, curation ...
    requested_share_bps: int = Field(ge=0, le=MAX_BPS)
    content_uri: Optional[str] = None
    votes_up: int = Field(default=0, ge=0)
    votes_down: int = Field(default=0, ge=0)
    voters_seen: Set[str] = Field(default_factory=set)
    status: ContributionStatus = ContributionStatus.pending
    rejection_reason: Optional[RejectionReason] = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_final(self) -> bool:
        return self.status != ContributionStatus.pending


class Asset(BaseModel):
    """Collaborative unit (an "NFT") that accumulates contributions."""
    id: int = Field(ge=1)
    creator: str
    title: str
    description: str
    royalty_budget_bps: int = Field(ge=0, le=MAX_BPS)
    is_open: bool = True
    contributions: List[Contribution] = Field(default_factory=list)
    metadata_uri: str = ""
    created_at: datetime = Field(default_factory=_utcnow)


# -------------------------
# Request models (validated input)
# -------------------------

class _NonBlank(BaseModel):
    @field_validator("*", mode="after")
    @classmethod
    def _not_blank(cls, v, info):
        if isinstance(v, str) and not v.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return v


class MintRequest(_NonBlank):
    creator: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    royalty_budget_bps: int = Field(ge=0, le=MAX_BPS, strict=True)


class ContributionRequest(_NonBlank):
    contributor: str = Field(min_length=1)
    kind: str = Field(min_length=1)
    requested_share_bps: int = Field(ge=0, le=MAX_BPS, strict=True)
    content_uri: Optional[str] = None


class VoteRequest(_NonBlank):
    voter: str = Field(min_length=1)
    direction: VoteDirection


def validated(model: Type[M], **fields) -> M:
    """Build a request model, surfacing the first pydantic error as InvalidInput."""
    try:
        return model(**fields)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ())) or model.__name__
        raise InvalidInput(f"{loc}: {err.get('msg', 'invalid value')}") from e


# -------------------------
# Read-side projections
# -------------------------

class Attribute(BaseModel):
    trait_type: str
    value: Union[int, str]


class AssetMetadata(BaseModel):
    """Marketplace-style metadata document for an asset."""
    name: str
    description: str
    image: str
    attributes: List[Attribute]


class RoyaltyShare(BaseModel):
    contribution_id: int
    contributor: str
    share_bps: int
    amount: int = Field(ge=0)


class RoyaltySplit(BaseModel):
    """What each party is owed from `amount` of proceeds. Nothing is paid out here."""
    asset_id: int
    amount: int = Field(ge=0)
    royalty_budget_bps: int
    allocated_bps: int
    shares: List[RoyaltyShare] = Field(default_factory=list)
    creator_amount: int = Field(ge=0)


class RoyaltyStatus(BaseModel):
    asset_id: int
    royalty_budget_bps: int
    allocated_bps: int
    remaining_bps: int
    split: Optional[RoyaltySplit] = None


class VoteReply(BaseModel):
    ok: bool
    contribution: Contribution
    allocated_bps: int
    remaining_bps: int
