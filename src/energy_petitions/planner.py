from __future__ import annotations

from typing import FrozenSet

from .currency import ZERO_BRL
from .schema import NormalizedCase, ProblemType, SectionPlan

# Only disputed charges can be declared void.
DEBT_NULLITY_PROBLEMS: FrozenSet[ProblemType] = frozenset({"improper-fine", "improper-billing"})


def _has_material_damages(case: NormalizedCase) -> bool:
    if case.material_value == ZERO_BRL:
        return False
    return case.material_amount is None or case.material_amount > 0


def plan(case: NormalizedCase) -> SectionPlan:
    return SectionPlan(
        include_urgent_relief=case.urgent_relief,
        include_material_damages=_has_material_damages(case),
        include_moral_damages=case.moral_damages,
        include_debt_nullity=case.problem_type in DEBT_NULLITY_PROBLEMS,
    )
