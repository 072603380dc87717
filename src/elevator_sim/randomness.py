from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """The only source of nondeterminism the core consumes."""

    def next_bool(self) -> bool:
        ...

    def next_float(self) -> float:
        ...

    def next_id(self) -> str:
        ...


class SeededRandom:
    """``RandomSource`` backed by ``random.Random``; seed it for repeatable runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.random = random.Random(seed)

    def next_bool(self) -> bool:
        return self.random.random() < 0.5

    def next_float(self) -> float:
        return self.random.random()

    def next_id(self) -> str:
        return f"{self.random.getrandbits(48):012x}"
