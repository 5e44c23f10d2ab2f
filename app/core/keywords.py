"""
Respostas rápidas por palavra-chave, sem passar pelo modelo.
"""
from typing import Mapping, Optional

from ..domain.moon import LunarPhase
from ..domain.rituals import ritual_advisory, ritual_practice


def extract_query_text(query_params: Mapping[str, str]) -> str:
    """
    Texto consultado pelo cliente: `message` tem precedência sobre `q`.
    """
    return query_params.get("message") or query_params.get("q") or ""


def match_keyword_reply(text: str, phase: LunarPhase) -> Optional[str]:
    """
    Monta a resposta para a primeira palavra-chave encontrada, na ordem
    "moon ritual", "moon", "suggestion". Retorna None se nenhuma bater.
    """
    lowered = text.lower()
    prefix = f"🌙 Tonight is the {phase.value} moon."

    if "moon ritual" in lowered:
        return f"{prefix} Ritual: {ritual_practice(phase)}"

    if "moon" in lowered:
        return f"{prefix} {ritual_advisory(phase)}"

    if "suggestion" in lowered:
        return f"{prefix} Suggested ritual: {ritual_advisory(phase)}"

    return None
