"""Ordered provider candidates with a last-success hint."""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional

from .types import ProviderCandidate, ProviderHint


class HintCell:
    """Holds the most recent successful provider.

    The stored value is an immutable ``ProviderHint`` replaced in a single
    assignment, so concurrent readers see either the old or the new hint.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._hint = ProviderHint()

    def set(self, provider_id: str) -> None:
        self._hint = ProviderHint(provider_id=provider_id, set_at=self._clock())

    def current(self) -> Optional[str]:
        hint = self._hint
        if hint.provider_id is None:
            return None
        if self._clock() - hint.set_at >= self.ttl_seconds:
            return None
        return hint.provider_id


class ProviderRegistry:
    def __init__(self, routes: Iterable[str], hint: HintCell | None = None) -> None:
        self.candidates: List[ProviderCandidate] = []
        seen = set()
        for route in routes:
            route = str(route).strip()
            if not route or route in seen:
                continue
            seen.add(route)
            self.candidates.append(ProviderCandidate(route=route, rank=len(self.candidates)))
        if not self.candidates:
            raise ValueError("ProviderRegistry needs at least one candidate route")
        self.hint = hint or HintCell()

    def ordered_candidates(self) -> List[ProviderCandidate]:
        preferred = self.hint.current()
        if preferred is None:
            return list(self.candidates)
        front = [c for c in self.candidates if c.route == preferred]
        if not front:
            return list(self.candidates)
        return front + [c for c in self.candidates if c.route != preferred]

    def remember(self, route: str) -> None:
        self.hint.set(route)
