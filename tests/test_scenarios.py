# End-to-end walk: mint, contribute, approve, over-subscribe, self-vote.
import pytest

from collabnft.errors import SelfVoteForbidden
from collabnft.schema import ContributionStatus, RejectionReason


def test_walkthrough(core):
    # A
    asset = core.mint(creator="0xA", title="T", description="D", royalty_budget_bps=5000)
    assert asset.id == 1
    assert asset.is_open is True
    assert core.allocated_bps(1) == 0

    # B
    art = core.request_contribution(1, "0xB", "art", 2000)
    assert art.status == ContributionStatus.pending
    assert (art.votes_up, art.votes_down) == (0, 0)

    # C
    for voter in ("0xC", "0xD", "0xE"):
        out = core.vote(art.id, voter, "up")
    assert out.status == ContributionStatus.approved
    assert core.allocated_bps(1) == 2000

    # D
    big = core.request_contribution(1, "0xF", "lyrics", 4000)
    for voter in ("0xC", "0xD", "0xE"):
        out = core.vote(big.id, voter, "up")
    assert out.status == ContributionStatus.rejected
    assert out.rejection_reason == RejectionReason.royalty_budget_exceeded
    assert core.allocated_bps(1) == 2000

    # E
    before = core.get_asset(1)
    with pytest.raises(SelfVoteForbidden):
        core.vote(art.id, "0xB", "up")
    assert core.get_asset(1) == before
