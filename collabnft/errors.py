# collabnft/errors.py
from __future__ import annotations


class CollabError(ValueError):
    """Base for every caller-facing failure of the core. `code` is wire-safe."""
    code: str = "collab_error"


class InvalidInput(CollabError):
    code = "invalid_input"


class NotFound(CollabError, LookupError):
    code = "not_found"


class AssetClosed(CollabError):
    code = "asset_closed"


# state conflicts: caller must refresh before retrying
class DuplicatePending(CollabError):
    code = "duplicate_pending"


class DuplicateVote(CollabError):
    code = "duplicate_vote"


class SelfVoteForbidden(CollabError):
    code = "self_vote_forbidden"


class AlreadyFinalized(CollabError):
    code = "already_finalized"


class InvariantViolation(AssertionError):
    """Internal defect (e.g. royalty budget over-allocated). Never part of the public contract."""
