import pytest

from study_tutor.llm.registry import HintCell, ProviderRegistry


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _routes(registry):
    return [c.route for c in registry.ordered_candidates()]


def test_static_order_without_hint():
    registry = ProviderRegistry(["a:1", "b:2", "c:3"], hint=HintCell(clock=FakeClock()))
    assert _routes(registry) == ["a:1", "b:2", "c:3"]
    assert [c.rank for c in registry.candidates] == [0, 1, 2]


def test_duplicate_routes_are_removed():
    registry = ProviderRegistry(["a:1", "b:2", "a:1"], hint=HintCell(clock=FakeClock()))
    assert _routes(registry) == ["a:1", "b:2"]


def test_fresh_hint_moves_route_to_front():
    clock = FakeClock()
    registry = ProviderRegistry(["a:1", "b:2", "c:3"], hint=HintCell(ttl_seconds=10, clock=clock))
    registry.remember("c:3")
    assert _routes(registry) == ["c:3", "a:1", "b:2"]

    clock.now = 9.9
    assert _routes(registry) == ["c:3", "a:1", "b:2"]

    clock.now = 10.0
    assert _routes(registry) == ["a:1", "b:2", "c:3"]


def test_unknown_hint_is_ignored():
    registry = ProviderRegistry(["a:1", "b:2"], hint=HintCell(clock=FakeClock()))
    registry.remember("z:9")
    assert _routes(registry) == ["a:1", "b:2"]


def test_empty_registry_is_rejected():
    with pytest.raises(ValueError):
        ProviderRegistry([])


def test_separate_hint_cells_are_isolated():
    first = ProviderRegistry(["a:1", "b:2"], hint=HintCell(clock=FakeClock()))
    second = ProviderRegistry(["a:1", "b:2"], hint=HintCell(clock=FakeClock()))
    first.remember("b:2")
    assert _routes(first) == ["b:2", "a:1"]
    assert _routes(second) == ["a:1", "b:2"]
