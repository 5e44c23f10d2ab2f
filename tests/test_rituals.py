import pytest

from app.core.keywords import extract_query_text, match_keyword_reply
from app.domain.moon import LunarPhase
from app.domain.rituals import (
    DEFAULT_ADVISORY,
    ritual_advisory,
    ritual_practice,
)


def test_every_phase_has_a_distinct_advisory():
    advisories = [ritual_advisory(phase) for phase in LunarPhase]
    assert len(set(advisories)) == len(LunarPhase)
    assert DEFAULT_ADVISORY not in advisories


def test_every_phase_has_a_distinct_practice():
    practices = [ritual_practice(phase) for phase in LunarPhase]
    assert len(set(practices)) == len(LunarPhase)


def test_advisory_is_deterministic_and_accepts_display_name():
    assert ritual_advisory(LunarPhase.FULL_MOON) == ritual_advisory("Full Moon")
    assert ritual_advisory("Full Moon") == "🌕 Celebrate and release what no longer serves."


@pytest.mark.parametrize("unknown", ["Blue Moon", "", None])
def test_unknown_phase_falls_back(unknown):
    assert ritual_advisory(unknown) == DEFAULT_ADVISORY
    assert ritual_practice(unknown) == DEFAULT_ADVISORY


def test_message_takes_precedence_over_q():
    assert extract_query_text({"message": "moon", "q": "suggestion"}) == "moon"
    assert extract_query_text({"message": "", "q": "suggestion"}) == "suggestion"
    assert extract_query_text({}) == ""


def test_moon_ritual_wins_over_suggestion():
    reply = match_keyword_reply("a suggestion for a MOON RITUAL", LunarPhase.NEW_MOON)
    assert reply == (
        "🌙 Tonight is the New Moon moon. Ritual: " + ritual_practice(LunarPhase.NEW_MOON)
    )


def test_moon_reply_uses_advisory():
    reply = match_keyword_reply("how is the Moon?", LunarPhase.WANING_CRESCENT)
    assert reply == "🌙 Tonight is the Waning Crescent moon. 🌘 Rest and restore."


def test_suggestion_reply():
    reply = match_keyword_reply("any Suggestion?", LunarPhase.FIRST_QUARTER)
    assert reply == "🌙 Tonight is the First Quarter moon. Suggested ritual: 🌓 Take bold action and commit."


def test_no_keyword_returns_none():
    assert match_keyword_reply("hello there", LunarPhase.FULL_MOON) is None
