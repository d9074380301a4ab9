# miledesigns/services/estimator.py
# Ballpark construction cost; final quotes need a site visit.
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Quality = Literal["Standard", "Premium", "Luxury"]
ProjectType = Literal["New", "Renovation"]

MIN_AREA = 500
MAX_AREA = 10_000

RATES_PER_SQFT: dict[str, int] = {"Standard": 150, "Premium": 250, "Luxury": 450}
TYPE_MULTIPLIER: dict[str, float] = {"New": 1.0, "Renovation": 0.65}
BREAKDOWN: tuple[tuple[str, float], ...] = (
    ("Materials", 0.45),
    ("Labor", 0.35),
    ("Permits & Design", 0.12),
    ("Contingency", 0.08),
)


class CostLine(BaseModel):
    category: str
    value: float


class CostEstimate(BaseModel):
    area: int
    quality: Quality
    project_type: ProjectType
    total: float
    breakdown: list[CostLine] = Field(default_factory=list)


def estimate_cost(area: int, quality: Quality = "Premium", project_type: ProjectType = "New") -> CostEstimate:
    if not MIN_AREA <= area <= MAX_AREA:
        raise ValueError(f"area must be between {MIN_AREA} and {MAX_AREA} sq. ft.")
    if quality not in RATES_PER_SQFT:
        raise ValueError(f"unknown quality: {quality}")
    if project_type not in TYPE_MULTIPLIER:
        raise ValueError(f"unknown project type: {project_type}")

    total = area * RATES_PER_SQFT[quality] * TYPE_MULTIPLIER[project_type]
    return CostEstimate(
        area=area,
        quality=quality,
        project_type=project_type,
        total=round(total, 2),
        breakdown=[CostLine(category=name, value=round(total * share, 2)) for name, share in BREAKDOWN],
    )
