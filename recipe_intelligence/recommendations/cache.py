from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict

from ..clustering.models import ClusteringResult
from ..regression.models import RegressionModel


class TrainedModel(BaseModel):
    """Output of one ``train()`` run. ``regression`` is None when the fit was singular."""

    model_config = ConfigDict(frozen=True)

    version: int
    k: int
    clustering: ClusteringResult
    regression: RegressionModel | None = None
    trained_at: float


class ModelCache:
    """
    Holds the last trained model.

    Written only by ``store()`` (called from ``train()``); each store replaces
    and thereby invalidates the previous entry. Readers get the frozen entry.
    """

    def __init__(self) -> None:
        self._entry: TrainedModel | None = None
        self._version = 0
        self._hits = 0
        self._misses = 0

    def store(
        self,
        k: int,
        clustering: ClusteringResult,
        regression: RegressionModel | None,
    ) -> TrainedModel:
        self._version += 1
        self._entry = TrainedModel(
            version=self._version,
            k=k,
            clustering=clustering,
            regression=regression,
            trained_at=time.time(),
        )
        return self._entry

    def get(self) -> TrainedModel | None:
        if self._entry is None:
            self._misses += 1
            return None
        self._hits += 1
        return self._entry

    def invalidate(self) -> None:
        self._entry = None

    @property
    def is_trained(self) -> bool:
        return self._entry is not None

    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "trained": self._entry is not None,
            "version": self._version,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }
