# collabnft/store.py
from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from collabnft.errors import NotFound
from collabnft.schema import Asset


class MemoryStore:
    """
    In-memory repository for assets and their contributions.

    Each asset plus its contribution list is one unit of mutation guarded by
    its own lock. Callers mutate only inside `locked(...)`; everything handed
    out otherwise is a deep copy taken under the same lock.
    """

    def __init__(self) -> None:
        self._assets: Dict[int, Asset] = {}
        self._locks: Dict[int, threading.Lock] = {}
        self._owner: Dict[int, int] = {}  # contribution id -> asset id
        self._registry_lock = threading.Lock()
        self._id_lock = threading.Lock()
        self._asset_ids = itertools.count(1)
        self._contribution_ids = itertools.count(1)

    # ---------- identity ----------

    def next_asset_id(self) -> int:
        with self._id_lock:
            return next(self._asset_ids)

    def next_contribution_id(self) -> int:
        with self._id_lock:
            return next(self._contribution_ids)

    # ---------- registration ----------

    def add_asset(self, asset: Asset) -> None:
        with self._registry_lock:
            if asset.id in self._assets:
                raise ValueError(f"asset id {asset.id} already registered")
            self._locks[asset.id] = threading.Lock()
            self._assets[asset.id] = asset

    def index_contribution(self, contribution_id: int, asset_id: int) -> None:
        with self._registry_lock:
            self._owner[contribution_id] = asset_id

    def owner_of(self, contribution_id: int) -> int:
        with self._registry_lock:
            asset_id = self._owner.get(contribution_id)
        if asset_id is None:
            raise NotFound(f"contribution {contribution_id} not found")
        return asset_id

    def asset_ids(self) -> List[int]:
        with self._registry_lock:
            return sorted(self._assets)

    # ---------- access ----------

    @contextmanager
    def locked(self, asset_id: int) -> Iterator[Asset]:
        """Yield the live asset with its lock held; released on every exit path."""
        with self._registry_lock:
            lock = self._locks.get(asset_id)
            asset = self._assets.get(asset_id)
        if lock is None or asset is None:
            raise NotFound(f"asset {asset_id} not found")
        with lock:
            yield asset

    def snapshot(self, asset_id: int) -> Asset:
        with self.locked(asset_id) as asset:
            return asset.model_copy(deep=True)

    def snapshots(self) -> List[Asset]:
        return [self.snapshot(i) for i in self.asset_ids()]
