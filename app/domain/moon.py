"""
Cálculo da fase lunar a partir de um instante no tempo.

Usa uma lua nova de referência e o período sinódico médio; não depende
de efemérides externas.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


# Lua nova de referência: 2000-01-06 18:14 UTC
REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)

# Período sinódico em segundos (~29,53 dias)
SYNODIC_PERIOD_SECONDS = 2_551_443


class LunarPhase(str, Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


# Limite superior (exclusivo) de cada fase, em ordem
_PHASE_UPPER_BOUNDS = (
    (0.03, LunarPhase.NEW_MOON),
    (0.22, LunarPhase.WAXING_CRESCENT),
    (0.28, LunarPhase.FIRST_QUARTER),
    (0.47, LunarPhase.WAXING_GIBBOUS),
    (0.53, LunarPhase.FULL_MOON),
    (0.72, LunarPhase.WANING_GIBBOUS),
    (0.78, LunarPhase.LAST_QUARTER),
    (0.97, LunarPhase.WANING_CRESCENT),
)


def phase_fraction(moment: datetime) -> float:
    """
    Posição no ciclo lunar, em [0, 1).

    Datetimes sem fuso são tratados como UTC. Instantes anteriores à
    referência também caem em [0, 1): o % do Python com divisor positivo
    nunca retorna negativo.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    elapsed = (moment - REFERENCE_NEW_MOON).total_seconds()
    fraction = (elapsed % SYNODIC_PERIOD_SECONDS) / SYNODIC_PERIOD_SECONDS
    # arredondamento de float pode produzir exatamente 1.0
    if fraction >= 1.0:
        fraction = 0.0
    return fraction


def phase_for_fraction(fraction: float) -> LunarPhase:
    """
    Converte a posição no ciclo no nome da fase (limite inferior inclusivo,
    superior exclusivo). De 0.97 em diante volta a ser Lua Nova.
    """
    for upper, phase in _PHASE_UPPER_BOUNDS:
        if fraction < upper:
            return phase
    return LunarPhase.NEW_MOON


def moon_phase(moment: Optional[datetime] = None) -> LunarPhase:
    if moment is None:
        moment = datetime.now(timezone.utc)
    return phase_for_fraction(phase_fraction(moment))
