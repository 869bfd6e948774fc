import pytest

from collabnft.approval import ApprovalConfig
from collabnft.errors import AlreadyFinalized, DuplicateVote, InvalidInput, NotFound, SelfVoteForbidden
from collabnft.schema import ContributionStatus, RejectionReason, VoteDirection

from conftest import cast, make_core


def _pending(core, asset, share=1000, who="0xB", kind="art"):
    return core.request_contribution(asset.id, who, kind, share)


def test_three_up_votes_approve(core, asset):
    c = _pending(core, asset)
    out = cast(core, c.id, ["0xC", "0xD"])
    assert out.status == ContributionStatus.pending
    out = core.vote(c.id, "0xE", VoteDirection.up)
    assert out.status == ContributionStatus.approved
    assert out.rejection_reason is None
    assert out.voters_seen == {"0xC", "0xD", "0xE"}


def test_three_down_votes_reject(core, asset):
    c = _pending(core, asset)
    out = cast(core, c.id, ["0xC", "0xD", "0xE"], "down")
    assert out.status == ContributionStatus.rejected
    assert out.rejection_reason == RejectionReason.votes
    assert core.allocated_bps(asset.id) == 0


def test_down_votes_delay_approval(core, asset):
    c = _pending(core, asset)
    cast(core, c.id, ["0xC", "0xD"], "down")
    out = cast(core, c.id, ["0xE", "0xF", "0xG", "0xH"])
    assert out.status == ContributionStatus.pending  # 4 up, 2 down: margin 2
    out = core.vote(c.id, "0xI", "up")
    assert out.status == ContributionStatus.approved
    assert (out.votes_up, out.votes_down) == (5, 2)


def test_minimum_votes_gate():
    core = make_core(threshold=1, minimum=3)
    asset = core.mint("0xA", "T", "D", 5000)
    c = core.request_contribution(asset.id, "0xB", "art", 100)
    assert core.vote(c.id, "0xC", "up").status == ContributionStatus.pending
    assert core.vote(c.id, "0xD", "up").status == ContributionStatus.pending
    assert core.vote(c.id, "0xE", "up").status == ContributionStatus.approved


def test_single_down_vote_rejects_with_threshold_one():
    core = make_core(threshold=1, minimum=3)
    asset = core.mint("0xA", "T", "D", 5000)
    c = core.request_contribution(asset.id, "0xB", "art", 100)
    out = core.vote(c.id, "0xC", "down")
    assert out.status == ContributionStatus.rejected
    assert out.rejection_reason == RejectionReason.votes


def test_vote_after_final_fails_and_counters_hold(core, asset):
    c = _pending(core, asset)
    cast(core, c.id, ["0xC", "0xD", "0xE"])
    with pytest.raises(AlreadyFinalized):
        core.vote(c.id, "0xF", "down")
    after = core.get_contribution(c.id)
    assert (after.votes_up, after.votes_down) == (3, 0)
    assert "0xF" not in after.voters_seen


def test_duplicate_vote(core, asset):
    c = _pending(core, asset)
    core.vote(c.id, "0xC", "up")
    with pytest.raises(DuplicateVote):
        core.vote(c.id, "0xC", "down")
    after = core.get_contribution(c.id)
    assert (after.votes_up, after.votes_down) == (1, 0)


def test_self_vote_forbidden(core, asset):
    c = _pending(core, asset)
    with pytest.raises(SelfVoteForbidden):
        core.vote(c.id, "0xB", "up")
    after = core.get_contribution(c.id)
    assert (after.votes_up, after.votes_down) == (0, 0)
    assert after.voters_seen == set()


def test_creator_may_vote(core, asset):
    c = _pending(core, asset)
    assert core.vote(c.id, asset.creator, "up").votes_up == 1


def test_votes_still_accepted_after_close(core, asset):
    c = _pending(core, asset)
    core.close_asset(asset.id)
    out = cast(core, c.id, ["0xC", "0xD", "0xE"])
    assert out.status == ContributionStatus.approved


def test_unknown_contribution(core):
    with pytest.raises(NotFound):
        core.vote(12345, "0xC", "up")


@pytest.mark.parametrize("voter,direction", [("", "up"), ("0xC", "sideways")])
def test_invalid_vote(core, asset, voter, direction):
    c = _pending(core, asset)
    with pytest.raises(InvalidInput):
        core.vote(c.id, voter, direction)
    assert core.get_contribution(c.id).votes_up == 0


def test_config_bounds():
    with pytest.raises(ValueError):
        ApprovalConfig(approval_threshold=0)
    with pytest.raises(ValueError):
        ApprovalConfig(minimum_votes=-1)


def test_self_vote_on_finalized_contribution_is_still_self_vote(core, asset):
    c = _pending(core, asset)
    cast(core, c.id, ["0xC", "0xD", "0xE"])
    with pytest.raises(SelfVoteForbidden):
        core.vote(c.id, "0xB", "up")
    with pytest.raises(AlreadyFinalized):
        core.vote(c.id, "0xF", "up")
    after = core.get_contribution(c.id)
    assert (after.votes_up, after.votes_down) == (3, 0)
    assert after.status == ContributionStatus.approved
