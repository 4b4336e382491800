"""Point multiplier rule table."""

import pytest

from gymcloud.gamification.levels import (
    ClassContext,
    GenericContext,
    RoutineContext,
    get_tier,
    resolve_level,
    resolve_multiplier,
)

ALL_CONTEXTS = [
    ClassContext(is_boosted_class=True),
    ClassContext(is_boosted_class=False),
    RoutineContext(),
    GenericContext(),
]


class TestResolveMultiplier:
    @pytest.mark.parametrize("context", ALL_CONTEXTS)
    def test_level_5_any_activity(self, context):
        assert resolve_multiplier(get_tier(5), context) == pytest.approx(1.30)

    @pytest.mark.parametrize("context", ALL_CONTEXTS)
    def test_level_4_any_activity(self, context):
        assert resolve_multiplier(get_tier(4), context) == pytest.approx(1.20)

    def test_level_3_routine(self):
        assert resolve_multiplier(get_tier(3), RoutineContext()) == pytest.approx(1.10)

    @pytest.mark.parametrize("context", [ClassContext(is_boosted_class=True), GenericContext()])
    def test_level_3_other_activity(self, context):
        assert resolve_multiplier(get_tier(3), context) == pytest.approx(1.0)

    def test_level_2_boosted_class(self):
        assert resolve_multiplier(get_tier(2), ClassContext(is_boosted_class=True)) == pytest.approx(1.05)

    def test_level_2_regular_class(self):
        assert resolve_multiplier(get_tier(2), ClassContext(is_boosted_class=False)) == pytest.approx(1.0)

    def test_level_2_class_defaults_to_not_boosted(self):
        assert resolve_multiplier(get_tier(2), ClassContext()) == pytest.approx(1.0)

    def test_level_2_routine(self):
        assert resolve_multiplier(get_tier(2), RoutineContext()) == pytest.approx(1.0)

    @pytest.mark.parametrize("context", ALL_CONTEXTS)
    def test_level_1_never_boosted(self, context):
        assert resolve_multiplier(get_tier(1), context) == pytest.approx(1.0)

    def test_from_point_total(self):
        tier = resolve_level(150).tier
        assert resolve_multiplier(tier, GenericContext()) == pytest.approx(1.20)

    def test_never_below_one(self):
        for level in range(1, 6):
            for context in ALL_CONTEXTS:
                assert resolve_multiplier(get_tier(level), context) >= 1.0

    def test_deterministic(self):
        tier = get_tier(3)
        assert resolve_multiplier(tier, RoutineContext()) == resolve_multiplier(tier, RoutineContext())
