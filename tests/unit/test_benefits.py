import pytest

from takehome.core.benefits import (
    BenefitOverride,
    benefits_value,
    build_benefit_items,
    reset_overrides,
    resolve_benefit_items,
    update_override,
)
from takehome.core.errors import InvalidArgumentError


def _by_key(items):
    return {item.key: item for item in items}


def test_individual_defaults_full_time():
    items = _by_key(build_benefit_items("individual", 67, 2080))
    assert [key for key in items] == [
        "health", "dental", "vision", "401k", "pto", "holidays", "life", "hsa"
    ]
    assert items["health"].amount == 8_400
    assert items["401k"].amount == 5_574
    assert items["pto"].amount == 8_040
    assert items["pto"].days == 15
    assert items["holidays"].amount == 5_360
    assert items["health"].days is None
    assert benefits_value(items.values()) == pytest.approx(29_974)


def test_family_coverage_raises_insurance_only():
    individual = _by_key(build_benefit_items("individual", 67, 2080))
    family = _by_key(build_benefit_items("family", 67, 2080))
    assert family["health"].amount == 20_000
    assert family["dental"].amount == 1_800
    assert family["vision"].amount == 350
    assert family["pto"].amount == individual["pto"].amount
    assert family["life"].amount == individual["life"].amount


def test_fixed_amounts_scale_with_part_time_hours():
    items = _by_key(build_benefit_items("individual", 50, 1040))
    assert items["health"].amount == 4_200
    assert items["hsa"].amount == 375
    # 15 days * 8h * $50, at half time
    assert items["pto"].amount == 3_000


def test_off_mode_has_no_benefits():
    assert resolve_benefit_items("off", "individual", 67, 2080) == []


def test_averages_mode_ignores_overrides():
    overrides = {"health": BenefitOverride(enabled=False)}
    items = resolve_benefit_items("averages", "individual", 67, 2080, overrides)
    assert all(item.enabled for item in items)


def test_custom_mode_merges_overrides():
    overrides = {
        "health": BenefitOverride(amount=12_000),
        "vision": BenefitOverride(enabled=False),
        "pto": BenefitOverride(days=20),
        "401k": BenefitOverride(amount=99_999),
    }
    items = _by_key(resolve_benefit_items("custom", "individual", 67, 2080, overrides))
    assert items["health"].amount == 12_000
    assert items["vision"].enabled is False
    assert items["pto"].days == 20
    assert items["pto"].amount == 10_720
    # percent-based amounts always follow gross
    assert items["401k"].amount == 5_574
    assert items["dental"].amount == 700


def test_custom_day_items_follow_rate_changes():
    overrides = {"holidays": BenefitOverride(days=12)}
    slow = _by_key(resolve_benefit_items("custom", "individual", 50, 2080, overrides))
    fast = _by_key(resolve_benefit_items("custom", "individual", 100, 2080, overrides))
    assert slow["holidays"].amount == 4_800
    assert fast["holidays"].amount == 9_600


def test_custom_fixed_items_follow_coverage_until_overridden():
    items = _by_key(resolve_benefit_items("custom", "family", 67, 2080, {}))
    assert items["health"].amount == 20_000


def test_update_and_reset_overrides():
    overrides = update_override(reset_overrides(), "dental", enabled=False)
    overrides = update_override(overrides, "dental", amount=900)
    assert overrides["dental"] == BenefitOverride(enabled=False, amount=900)
    assert reset_overrides() == {}


def test_update_override_is_a_copy():
    original = {"life": BenefitOverride(amount=500)}
    updated = update_override(original, "life", enabled=False)
    assert original["life"].enabled is None
    assert updated["life"].enabled is False


@pytest.mark.parametrize(
    "key, patch",
    [
        ("gym", {"enabled": False}),
        ("health", {"amount": -5}),
        ("pto", {"days": float("inf")}),
        ("health", {"colour": "red"}),
    ],
)
def test_bad_overrides_raise(key, patch):
    with pytest.raises(InvalidArgumentError):
        update_override({}, key, **patch)


def test_unknown_override_key_in_custom_mode():
    with pytest.raises(InvalidArgumentError):
        resolve_benefit_items("custom", "individual", 67, 2080, {"gym": BenefitOverride(amount=1)})


def test_unknown_mode_or_coverage():
    with pytest.raises(InvalidArgumentError):
        resolve_benefit_items("lavish", "individual", 67, 2080)
    with pytest.raises(InvalidArgumentError):
        build_benefit_items("couple", 67, 2080)


def test_custom_untouched_fixed_items_follow_hours():
    overrides = {"dental": BenefitOverride(amount=900)}
    full = _by_key(resolve_benefit_items("custom", "individual", 67, 2080, overrides))
    half = _by_key(resolve_benefit_items("custom", "individual", 67, 1040, overrides))
    assert full["health"].amount == 8_400
    assert half["health"].amount == 4_200
    # an entered amount is kept as is
    assert half["dental"].amount == 900
