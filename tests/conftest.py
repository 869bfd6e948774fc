import pytest

from collabnft.approval import ApprovalConfig
from collabnft.core import CollabCore
from collabnft.settings import Settings


def make_core(threshold: int = 3, minimum: int = 3) -> CollabCore:
    return CollabCore(
        ApprovalConfig(approval_threshold=threshold, minimum_votes=minimum),
        public_base_url="http://test.local",
        settings=Settings(),
    )


def cast(core, contribution_id, voters, direction="up"):
    out = None
    for v in voters:
        out = core.vote(contribution_id, v, direction)
    return out


@pytest.fixture
def core() -> CollabCore:
    return make_core()


@pytest.fixture
def asset(core):
    return core.mint("0xA", "T", "D", 5000)
