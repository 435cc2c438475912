"""
Parameter name normalization.

Measurement tools and explainability exports spell the same metric many ways
("cell radius", "Spheroid Size", ...). normalize() maps them onto
CanonicalParameter; unknown names pass through trimmed and lowercased.
"""

from __future__ import annotations

from typing import Mapping

from invasion_factor.scoring.models import WEIGHTED_PARAMETERS, CanonicalParameter

# One entry per semantic group
ALIAS_GROUPS: dict[CanonicalParameter, frozenset[str]] = {
    CanonicalParameter.SPHEROID_RADIUS: frozenset(
        {"cell radius", "radius", "spheroid size", "spheroid radius", "spheroid-radius"}
    ),
    CanonicalParameter.TOTAL_AREA: frozenset(
        {"area", "total area", "total-area", "cell area", "spheroid area"}
    ),
    CanonicalParameter.MIGRATION_RADIUS: frozenset(
        {"migration radius", "migration-radius", "invasion radius", "max radius"}
    ),
    CanonicalParameter.MIGRATION_DISTRIBUTION: frozenset(
        {"migration distribution", "migration-distribution", "distribution", "spread"}
    ),
    CanonicalParameter.PROJECTION_COUNT: frozenset(
        {"projections", "projection count", "projection-count", "number of projections", "protrusions"}
    ),
}

_ALIASES: dict[str, CanonicalParameter] = {
    alias: canonical for canonical, aliases in ALIAS_GROUPS.items() for alias in aliases
}
_ALIASES.update({p.value: p for p in CanonicalParameter})


def normalize(name: str) -> CanonicalParameter | str:
    """
    Return the canonical parameter for name, or name trimmed and lowercased.

    Idempotent: normalize(normalize(x)) == normalize(x).
    """
    key = name.strip().lower()
    return _ALIASES.get(key, key)


def measured_vector(parameters: Mapping[str, float]) -> list[float]:
    """
    Align a free-form ParameterSet with WEIGHTED_PARAMETERS.

    Keys are normalized; later duplicates of the same canonical parameter win.
    Missing parameters are 0.0.
    """
    by_canonical: dict[CanonicalParameter | str, float] = {}
    for name, value in parameters.items():
        by_canonical[normalize(name)] = float(value)
    return [by_canonical.get(p, 0.0) for p in WEIGHTED_PARAMETERS]


def missing_parameters(parameters: Mapping[str, float]) -> list[str]:
    """Return canonical names of weighted parameters absent from parameters."""
    present = {normalize(name) for name in parameters}
    return [p.value for p in WEIGHTED_PARAMETERS if p not in present]
