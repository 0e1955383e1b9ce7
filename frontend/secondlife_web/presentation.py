"""Display helpers for recommendation cards"""

from typing import Dict, Iterable, Tuple

# (minimum score, label, css class), highest first
MATCH_TIERS = (
    (80, "Excellent match", "tier-excellent"),
    (60, "Bon match", "tier-good"),
    (40, "Match correct", "tier-fair"),
    (0, "Match faible", "tier-weak"),
)


def match_tier(score: float) -> Tuple[str, str]:
    """Label and css class for a match score"""
    for minimum, label, css_class in MATCH_TIERS:
        if score >= minimum:
            return label, css_class
    return MATCH_TIERS[-1][1], MATCH_TIERS[-1][2]


def format_score(score: float) -> str:
    return f"{round(score)}%"


def reasons_tooltip(reasons: Iterable[Dict]) -> str:
    """One line per reason, e.g. "+30 Catégorie préférée: BOOKS" """
    lines = [f"+{reason['score']:g} {reason['description']}" for reason in reasons]
    return "\n".join(lines) if lines else "Aucune raison particulière"
