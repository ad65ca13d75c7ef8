"""Funnel conversion arithmetic.

Rates are percentages rounded half-up to two decimals. A zero denominator
yields 0 rather than NaN or infinity, and the first stage of a funnel is
always 100.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


_CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class StageCount:
    name: str
    unique_visitors: int
    total_visits: int


@dataclass(frozen=True, slots=True)
class FunnelStage:
    name: str
    unique_visitors: int
    total_visits: int
    conversion_rate: float


def conversion_rate(numerator: int, denominator: int) -> float:
    if not denominator:
        return 0.0
    rate = Decimal(numerator) * 100 / Decimal(denominator)
    return float(rate.quantize(_CENT, rounding=ROUND_HALF_UP))


def build_funnel_stages(counts: Sequence[StageCount]) -> list[FunnelStage]:
    stages: list[FunnelStage] = []
    previous: StageCount | None = None
    for count in counts:
        rate = 100.0 if previous is None else conversion_rate(count.unique_visitors, previous.unique_visitors)
        stages.append(FunnelStage(count.name, count.unique_visitors, count.total_visits, rate))
        previous = count
    return stages


def funnel_metrics(website_visitors: int, store_visitors: int, signups: int) -> dict[str, float]:
    return {
        "websiteToStore": conversion_rate(store_visitors, website_visitors),
        "storeToSignup": conversion_rate(signups, store_visitors),
        "overallConversion": conversion_rate(signups, website_visitors),
    }
