import pytest

from takehome.core.brackets import (
    Bracket,
    StateBracket,
    build_state_schedule,
    check_progressive_schedule,
    check_state_schedule,
    published_base_drift,
    tax_from_base_table,
    tax_from_brackets,
)
from takehome.core.errors import InvalidArgumentError, UnknownFilingStatusError
from takehome.core.tax_years import federal_tax, state_tax
from takehome.core.tax_years.y2025.california import (
    CA_BRACKETS_2025,
    CA_PUBLISHED_BASES_2025,
    PUBLISHED_BASE_TOLERANCE,
    california_sdi_2025,
    check_published_bases,
)
from takehome.core.tax_years.y2025.federal import FEDERAL_BRACKETS_2025


def test_federal_single_first_bracket_edge():
    assert federal_tax(11_925, "single") == pytest.approx(1_192.50)
    assert federal_tax(48_475, "single") == pytest.approx(5_578.50)
    assert federal_tax(123_610, "single") == pytest.approx(22_513.40)


def test_federal_mfj_sample():
    assert federal_tax(100_000, "mfj") == pytest.approx(11_828.00)


@pytest.mark.parametrize("filing", ["single", "mfj"])
def test_federal_continuous_across_limits(filing):
    for bracket, following in zip(FEDERAL_BRACKETS_2025[filing], FEDERAL_BRACKETS_2025[filing][1:]):
        limit = bracket.up_to
        below = federal_tax(limit - 0.01, filing)
        at = federal_tax(limit, filing)
        above = federal_tax(limit + 0.01, filing)
        assert at - below == pytest.approx(0.01 * bracket.rate, abs=1e-6)
        assert above - at == pytest.approx(0.01 * following.rate, abs=1e-6)


@pytest.mark.parametrize("taxable", [0, -1, -50_000])
def test_non_positive_income_owes_nothing(taxable):
    assert federal_tax(taxable, "single") == 0
    assert state_tax(taxable, "mfj") == 0


def test_california_single_sample():
    assert state_tax(11_079, "single") == pytest.approx(110.79)
    assert state_tax(133_654, "single") == pytest.approx(8_868.46)


@pytest.mark.parametrize("filing", ["single", "mfj"])
def test_california_continuous_across_limits(filing):
    schedule = CA_BRACKETS_2025[filing]
    for bracket, following in zip(schedule, schedule[1:]):
        limit = bracket.upper
        at = state_tax(limit, filing)
        assert at - state_tax(limit - 0.01, filing) == pytest.approx(0.01 * bracket.rate, abs=1e-6)
        assert state_tax(limit + 0.01, filing) - at == pytest.approx(0.01 * following.rate, abs=1e-6)


@pytest.mark.parametrize("filing", ["single", "mfj"])
def test_california_bases_chain(filing):
    check_state_schedule(CA_BRACKETS_2025[filing])
    drift = published_base_drift(CA_BRACKETS_2025[filing], CA_PUBLISHED_BASES_2025[filing])
    assert drift <= PUBLISHED_BASE_TOLERANCE


def test_check_published_bases_reports_drift():
    drift = check_published_bases()
    assert set(drift) == {"single", "mfj"}
    assert all(0 <= gap <= PUBLISHED_BASE_TOLERANCE for gap in drift.values())


def test_unknown_filing_status_rejected():
    with pytest.raises(UnknownFilingStatusError):
        federal_tax(50_000, "hoh")
    with pytest.raises(InvalidArgumentError):
        state_tax(50_000, "married")


def test_sdi_has_no_wage_cap():
    assert california_sdi_2025(139_360) == pytest.approx(1_672.32)
    assert california_sdi_2025(1_000_000) == pytest.approx(12_000)


def test_tax_from_brackets_marginal_only():
    brackets = (Bracket(100, 0.1), Bracket(None, 0.5))
    assert tax_from_brackets(100, brackets) == pytest.approx(10)
    assert tax_from_brackets(150, brackets) == pytest.approx(35)


def test_build_state_schedule_derives_bases():
    schedule = build_state_schedule([(0.0, 100.0, 0.01), (100.0, 300.0, 0.02), (300.0, None, 0.05)])
    assert [b.base for b in schedule] == pytest.approx([0.0, 1.0, 5.0])
    assert tax_from_base_table(400, schedule) == pytest.approx(10.0)


def test_base_table_must_cover_income():
    schedule = (StateBracket(0.0, 100.0, 0.0, 0.01),)
    with pytest.raises(ValueError):
        tax_from_base_table(150, schedule)


def test_check_state_schedule_flags_broken_chain():
    broken = (
        StateBracket(0.0, 100.0, 0.0, 0.01),
        StateBracket(100.0, None, 5.0, 0.02),
    )
    with pytest.raises(ValueError, match="does not chain"):
        check_state_schedule(broken)


def test_check_progressive_schedule_rejects_bad_tables():
    with pytest.raises(ValueError):
        check_progressive_schedule((Bracket(100, 0.1), Bracket(50, 0.2), Bracket(None, 0.3)))
    with pytest.raises(ValueError):
        check_progressive_schedule((Bracket(100, 0.2), Bracket(None, 0.1)))
    with pytest.raises(ValueError):
        check_progressive_schedule((Bracket(100, 0.1),))


@pytest.mark.parametrize("taxable", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_income_rejected(taxable):
    with pytest.raises(InvalidArgumentError, match="taxable"):
        federal_tax(taxable, "single")
    with pytest.raises(InvalidArgumentError, match="taxable"):
        state_tax(taxable, "mfj")
