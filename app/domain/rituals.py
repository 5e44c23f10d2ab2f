"""
Textos de ritual associados a cada fase lunar.

Tabelas estáticas: `ritual_advisory` devolve a orientação curta da fase,
`ritual_practice` devolve o ritual completo sugerido para a noite.
"""
from typing import Dict, Union

from .moon import LunarPhase


DEFAULT_ADVISORY = "🌙 The moon is mysterious tonight. Listen inward."

ADVISORIES: Dict[LunarPhase, str] = {
    LunarPhase.NEW_MOON: "🌑 Set intentions and plant seeds of possibility.",
    LunarPhase.WAXING_CRESCENT: "🌒 Focus on growth and momentum.",
    LunarPhase.FIRST_QUARTER: "🌓 Take bold action and commit.",
    LunarPhase.WAXING_GIBBOUS: "🌔 Refine your vision and adjust your path.",
    LunarPhase.FULL_MOON: "🌕 Celebrate and release what no longer serves.",
    LunarPhase.WANING_GIBBOUS: "🌖 Reflect and share wisdom.",
    LunarPhase.LAST_QUARTER: "🌗 Cleanse and simplify.",
    LunarPhase.WANING_CRESCENT: "🌘 Rest and restore.",
}

PRACTICES: Dict[LunarPhase, str] = {
    LunarPhase.NEW_MOON: (
        "Light a single candle, write three intentions on paper and keep them "
        "under your pillow until the full moon."
    ),
    LunarPhase.WAXING_CRESCENT: (
        "Water a seed or a plant while speaking your intention aloud, "
        "then take one small step toward it before sleeping."
    ),
    LunarPhase.FIRST_QUARTER: (
        "Hold a piece of carnelian, name the obstacle in your way "
        "and commit to one decisive action tomorrow."
    ),
    LunarPhase.WAXING_GIBBOUS: (
        "Reread your intentions by candlelight and rewrite any that "
        "no longer feel true."
    ),
    LunarPhase.FULL_MOON: (
        "Leave a bowl of water under the moonlight to charge, and burn a list "
        "of what you are ready to release."
    ),
    LunarPhase.WANING_GIBBOUS: (
        "Journal three lessons from this cycle and share one of them "
        "with someone you trust."
    ),
    LunarPhase.LAST_QUARTER: (
        "Cleanse your space with smoke or salt water and clear out "
        "one drawer or corner you have been avoiding."
    ),
    LunarPhase.WANING_CRESCENT: (
        "Take a warm bath with lavender, breathe slowly and let "
        "the cycle close in silence."
    ),
}


def _as_phase(phase: Union[LunarPhase, str]):
    try:
        return LunarPhase(phase)
    except ValueError:
        return None


def ritual_advisory(phase: Union[LunarPhase, str]) -> str:
    return ADVISORIES.get(_as_phase(phase), DEFAULT_ADVISORY)


def ritual_practice(phase: Union[LunarPhase, str]) -> str:
    return PRACTICES.get(_as_phase(phase), DEFAULT_ADVISORY)
