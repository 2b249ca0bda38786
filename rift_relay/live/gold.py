"""
Gold-difference sampling for the gold graph overlay.
"""

import math
from typing import Optional

from .models import GoldSample

# A sample is taken in the first second of every SAMPLE_PERIOD_SECONDS window
SAMPLE_PERIOD_SECONDS = 10


class GoldHistory:
    """
    Append-only gold samples for one game session.

    Sampling is driven by game time, not by poll ticks, so two ticks landing in
    the same sampling second produce a single sample. The buffer is only
    cleared by reset(), which the live poller calls on game start.
    """

    def __init__(self) -> None:
        self._samples: list[GoldSample] = []

    def is_due(self, game_time: float) -> bool:
        """Whether a sample should be taken at this game time."""
        if game_time <= 0:
            return False
        second = math.floor(game_time)
        if second % SAMPLE_PERIOD_SECONDS >= 1:
            return False
        if self._samples and second <= self._samples[-1].time:
            return False
        return True

    def maybe_sample(self, game_time: float, blue_gold: int, red_gold: int) -> Optional[GoldSample]:
        """Append a sample if one is due and return it, else None."""
        if not self.is_due(game_time):
            return None

        sample = GoldSample(
            time=math.floor(game_time),
            blue_gold=blue_gold,
            red_gold=red_gold,
            diff=blue_gold - red_gold,
        )
        self._samples.append(sample)
        return sample

    def reset(self) -> None:
        self._samples = []

    def snapshot(self) -> list[GoldSample]:
        """Copy of the samples; callers may keep it without seeing later appends."""
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)
