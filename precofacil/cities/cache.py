from __future__ import annotations

import time
from typing import Callable

import pandas as pd

_DEFAULT_TTL = 24 * 60 * 60  # municipality list changes rarely


class CityCache:
    """Holds the municipality DataFrame with a TTL and explicit invalidation."""

    def __init__(
        self,
        loader: Callable[[], pd.DataFrame],
        ttl: float = _DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._df: pd.DataFrame | None = None
        self._loaded_at: float = 0.0
        self.loads = 0

    def is_fresh(self) -> bool:
        return self._df is not None and self._clock() - self._loaded_at < self._ttl

    def get(self) -> pd.DataFrame:
        """Return the cached frame, reloading it when missing or expired.

        Loader errors propagate and leave any previous frame untouched.
        """
        if not self.is_fresh():
            df = self._loader()
            self._df = df
            self._loaded_at = self._clock()
            self.loads += 1
        return self._df

    def invalidate(self) -> None:
        self._df = None
        self._loaded_at = 0.0

    def stats(self) -> dict:
        return {
            "loaded": self._df is not None,
            "size": 0 if self._df is None else len(self._df),
            "age_seconds": round(self._clock() - self._loaded_at, 1) if self._df is not None else None,
            "loads": self.loads,
        }
