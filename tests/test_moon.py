from datetime import datetime, timedelta, timezone

import pytest

from app.domain.moon import (
    LunarPhase,
    REFERENCE_NEW_MOON,
    SYNODIC_PERIOD_SECONDS,
    moon_phase,
    phase_for_fraction,
    phase_fraction,
)


def at_fraction(fraction, cycles=0):
    return REFERENCE_NEW_MOON + timedelta(
        seconds=(cycles + fraction) * SYNODIC_PERIOD_SECONDS
    )


# (limite, fase logo abaixo, fase a partir do limite)
BOUNDARIES = [
    (0.03, LunarPhase.NEW_MOON, LunarPhase.WAXING_CRESCENT),
    (0.22, LunarPhase.WAXING_CRESCENT, LunarPhase.FIRST_QUARTER),
    (0.28, LunarPhase.FIRST_QUARTER, LunarPhase.WAXING_GIBBOUS),
    (0.47, LunarPhase.WAXING_GIBBOUS, LunarPhase.FULL_MOON),
    (0.53, LunarPhase.FULL_MOON, LunarPhase.WANING_GIBBOUS),
    (0.72, LunarPhase.WANING_GIBBOUS, LunarPhase.LAST_QUARTER),
    (0.78, LunarPhase.LAST_QUARTER, LunarPhase.WANING_CRESCENT),
    (0.97, LunarPhase.WANING_CRESCENT, LunarPhase.NEW_MOON),
]


@pytest.mark.parametrize("boundary,below,above", BOUNDARIES)
def test_fraction_boundaries_are_lower_inclusive(boundary, below, above):
    assert phase_for_fraction(boundary - 1e-6) == below
    assert phase_for_fraction(boundary) == above
    assert phase_for_fraction(boundary + 1e-6) == above


@pytest.mark.parametrize("boundary,below,above", BOUNDARIES)
def test_timestamps_around_boundaries(boundary, below, above):
    # 60s ~ 2.4e-5 do ciclo
    epsilon = timedelta(seconds=60)
    assert moon_phase(at_fraction(boundary, cycles=300) - epsilon) == below
    assert moon_phase(at_fraction(boundary, cycles=300) + epsilon) == above


def test_reference_epoch_is_new_moon():
    assert phase_fraction(REFERENCE_NEW_MOON) == 0.0
    assert moon_phase(REFERENCE_NEW_MOON) == LunarPhase.NEW_MOON


def test_known_new_moon_date():
    assert moon_phase(datetime(2024, 1, 11, 12, 0, tzinfo=timezone.utc)) == LunarPhase.NEW_MOON


def test_known_full_moon_date():
    # lua cheia em 2024-01-25 17:54 UTC
    assert moon_phase(datetime(2024, 1, 25, 18, 0, tzinfo=timezone.utc)) == LunarPhase.FULL_MOON


def test_before_epoch_wraps_into_unit_interval():
    moment = REFERENCE_NEW_MOON - timedelta(seconds=0.25 * SYNODIC_PERIOD_SECONDS)
    fraction = phase_fraction(moment)
    assert 0.0 <= fraction < 1.0
    assert fraction == pytest.approx(0.75)
    assert moon_phase(moment) == LunarPhase.LAST_QUARTER


def test_naive_datetime_is_treated_as_utc():
    naive = datetime(2024, 1, 25, 18, 0)
    aware = naive.replace(tzinfo=timezone.utc)
    assert phase_fraction(naive) == phase_fraction(aware)


def test_total_over_wide_range():
    start = datetime(1900, 1, 1, tzinfo=timezone.utc)
    seen = set()
    for day in range(0, 365 * 250, 7):
        moment = start + timedelta(days=day, hours=day % 24)
        fraction = phase_fraction(moment)
        assert 0.0 <= fraction < 1.0
        phase = moon_phase(moment)
        assert isinstance(phase, LunarPhase)
        seen.add(phase)
    assert seen == set(LunarPhase)


def test_default_moment_is_now():
    assert isinstance(moon_phase(), LunarPhase)
