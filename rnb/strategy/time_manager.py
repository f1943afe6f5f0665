from __future__ import annotations

import time
from dataclasses import dataclass, field

from config import PlannerConfig


@dataclass
class TimeManager:
    """Wall-clock budget for one tier of the tiered search."""

    budget_s: float = field(default_factory=lambda: PlannerConfig.search_timeout_s)
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_s(self) -> float:
        return time.monotonic() - self.started_at

    def elapsed_ms(self) -> int:
        return int(self.elapsed_s() * 1000)

    def expired(self) -> bool:
        return self.elapsed_s() > self.budget_s
