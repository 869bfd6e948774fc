from __future__ import annotations

import logging
import sys
import time
from typing import Dict, List, Optional, Type

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from collabnft.core import CollabCore
from collabnft.errors import CollabError, InvalidInput, NotFound
from collabnft.schema import (
    Asset,
    AssetMetadata,
    Contribution,
    RoyaltyStatus,
    VoteReply,
)
from collabnft.settings import get_settings

logger = logging.getLogger(__name__)

# everything else is a state conflict
_STATUS: Dict[Type[CollabError], int] = {InvalidInput: 400, NotFound: 404}


def _http_error(e: CollabError) -> HTTPException:
    status = next((code for cls, code in _STATUS.items() if isinstance(e, cls)), 409)
    return HTTPException(status_code=status, detail={"code": e.code, "message": str(e)})


# Loose wire bodies: only shape is checked here, content rules live in the core
# so blank or out-of-range values come back as InvalidInput (400), not 422.

class MintBody(BaseModel):
    creator: str
    title: str
    description: str
    royalty_budget_bps: int


class ContributionBody(BaseModel):
    contributor: str
    kind: str
    requested_share_bps: int
    content_uri: Optional[str] = None


class VoteBody(BaseModel):
    voter: str
    direction: str


def create_app(core: Optional[CollabCore] = None) -> FastAPI:
    """Build the HTTP adapter. The core owns all state; routes only translate."""
    core = core or CollabCore()
    app = FastAPI(title="Collaborative NFT API", version="0.1.0")
    app.state.core = core

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    @app.get("/")
    def index():
        return {
            "message": "Collaborative NFT API is running",
            "endpoints": {
                "GET /api/nfts": "List assets",
                "POST /api/nfts": "Mint an asset",
                "GET /api/nfts/{id}": "Get an asset",
                "POST /api/nfts/{id}/close": "Close an asset to new contributions",
                "POST /api/nfts/{id}/contribute": "Request a contribution",
                "GET /api/nfts/{id}/contributions": "List contributions",
                "GET /api/nfts/{id}/royalties": "Royalty budget and split preview (?amount=)",
                "POST /api/contributions/{cid}/vote": "Vote on a contribution",
                "GET /api/metadata/{id}": "Asset metadata",
            },
        }

    @app.get("/health")
    def health():
        return {"ok": True, "ts": int(time.time())}

    # ---------- assets ----------

    @app.post("/api/nfts", status_code=201)
    def mint(body: MintBody):
        try:
            asset = core.mint(body.creator, body.title, body.description, body.royalty_budget_bps)
        except CollabError as e:
            raise _http_error(e) from e
        return {"success": True, "nft": asset}

    @app.get("/api/nfts", response_model=List[Asset])
    def list_assets() -> List[Asset]:
        return core.list_assets()

    @app.get("/api/nfts/{asset_id}", response_model=Asset)
    def get_asset(asset_id: int) -> Asset:
        try:
            return core.get_asset(asset_id)
        except CollabError as e:
            raise _http_error(e) from e

    @app.post("/api/nfts/{asset_id}/close", response_model=Asset)
    def close_asset(asset_id: int) -> Asset:
        try:
            core.close_asset(asset_id)
            return core.get_asset(asset_id)
        except CollabError as e:
            raise _http_error(e) from e

    # ---------- contributions ----------

    @app.post("/api/nfts/{asset_id}/contribute", status_code=201)
    def contribute(asset_id: int, body: ContributionBody):
        try:
            contribution = core.request_contribution(
                asset_id, body.contributor, body.kind, body.requested_share_bps,
                content_uri=body.content_uri,
            )
        except CollabError as e:
            raise _http_error(e) from e
        return {"success": True, "contribution": contribution}

    @app.get("/api/nfts/{asset_id}/contributions", response_model=List[Contribution])
    def list_contributions(asset_id: int) -> List[Contribution]:
        try:
            return core.list_contributions(asset_id)
        except CollabError as e:
            raise _http_error(e) from e

    @app.post("/api/contributions/{contribution_id}/vote", response_model=VoteReply)
    def vote(contribution_id: int, body: VoteBody) -> VoteReply:
        """Cast one vote; the reply carries the resulting status and the asset's budget position."""
        try:
            contribution = core.vote(contribution_id, body.voter, body.direction)
            status = core.royalty_status(contribution.asset_id)
        except CollabError as e:
            raise _http_error(e) from e
        return VoteReply(
            ok=True,
            contribution=contribution,
            allocated_bps=status.allocated_bps,
            remaining_bps=status.remaining_bps,
        )

    # ---------- royalties & metadata ----------

    @app.get("/api/nfts/{asset_id}/royalties", response_model=RoyaltyStatus)
    def royalties(asset_id: int, amount: Optional[int] = None) -> RoyaltyStatus:
        try:
            return core.royalty_status(asset_id, amount)
        except CollabError as e:
            raise _http_error(e) from e

    @app.get("/api/metadata/{asset_id}", response_model=AssetMetadata)
    def asset_metadata(asset_id: int) -> AssetMetadata:
        try:
            return core.metadata_projection(asset_id)
        except CollabError as e:
            raise _http_error(e) from e

    return app


app = create_app()


def main() -> None:
    """Entry point for `collab-server`."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s", "module": "%(name)s"}',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger.info("starting collab server on %s:%s", settings.host, settings.port)
    uvicorn.run("collabnft.adapters.fastapi_app:app", host=settings.host, port=settings.port, reload=False)
