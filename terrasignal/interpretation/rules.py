"""Deterministic interpretation of SOC change against climate conditions.

Each :class:`InterpretationRule` is an independent guard; every matching
rule contributes one :class:`Interpretation` and the output keeps the order
of :data:`INTERPRETATION_RULES`, not severity order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from terrasignal.core.utils import round_half_up, round_int
from terrasignal.schemas.context import Interpretation, MonitoringContext, Severity

SEVERE_DEFICIT_PCT = -25.0
MILD_DEFICIT_PCT = -10.0
WET_SURPLUS_PCT = 15.0
WARM_ANOMALY_C = 0.8


def _pct(value: float) -> int:
    return round_int(abs(value))


def _tenths(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"


def _has_soc(ctx: MonitoringContext) -> bool:
    return ctx.soc_change is not None


def _declined(ctx: MonitoringContext) -> bool:
    return ctx.soc_change is not None and ctx.soc_change < 0


def _increased(ctx: MonitoringContext) -> bool:
    return ctx.soc_change is not None and ctx.soc_change > 0


def _severe_deficit(ctx: MonitoringContext) -> bool:
    return ctx.precip_anomaly < SEVERE_DEFICIT_PCT


def _mild_deficit(ctx: MonitoringContext) -> bool:
    return SEVERE_DEFICIT_PCT <= ctx.precip_anomaly < MILD_DEFICIT_PCT


def _warm(ctx: MonitoringContext) -> bool:
    return ctx.temp_anomaly > WARM_ANOMALY_C


@dataclass(frozen=True)
class InterpretationRule:
    """A named guard with the narrative it produces when it matches."""

    name: str
    severity: Severity
    matches: Callable[[MonitoringContext], bool]
    headline: Callable[[MonitoringContext], str]
    body: Callable[[MonitoringContext], str]

    def apply(self, ctx: MonitoringContext) -> Interpretation | None:
        if not self.matches(ctx):
            return None
        return Interpretation(
            headline=self.headline(ctx), body=self.body(ctx), severity=self.severity
        )


INTERPRETATION_RULES: tuple[InterpretationRule, ...] = (
    InterpretationRule(
        name="decline-drought",
        severity="warning",
        matches=lambda c: _declined(c) and c.drought_occurred,
        headline=lambda c: "SOC decline consistent with drought conditions",
        body=lambda c: (
            f"The observed SOC decline of {_tenths(abs(c.soc_change or 0))} t C/ha is "
            "consistent with the severe drought conditions during this monitoring "
            "period. Reduced soil moisture and elevated temperatures accelerate "
            "organic matter decomposition. This does not necessarily indicate "
            "practice failure."
        ),
    ),
    InterpretationRule(
        name="decline-precip-deficit",
        severity="warning",
        matches=lambda c: _declined(c) and _severe_deficit(c) and not c.drought_occurred,
        headline=lambda c: "SOC decline during significant precipitation deficit",
        body=lambda c: (
            f"Precipitation was {_pct(c.precip_anomaly)}% below the 5-year average "
            "during the monitoring period. This moisture deficit likely contributed "
            "to reduced microbial activity and accelerated SOC decomposition, "
            "partially explaining the observed decline."
        ),
    ),
    InterpretationRule(
        name="increase-favorable",
        severity="positive",
        matches=lambda c: (
            _increased(c)
            and not c.drought_occurred
            and c.precip_anomaly > MILD_DEFICIT_PCT
        ),
        headline=lambda c: "SOC increase during favorable conditions",
        body=lambda c: (
            f"The observed SOC increase of {_tenths(c.soc_change or 0)} t C/ha "
            "occurred during relatively normal climate conditions, suggesting that "
            "management practices are contributing to soil carbon accumulation as intended."
        ),
    ),
    InterpretationRule(
        name="increase-adverse",
        severity="positive",
        matches=lambda c: _increased(c) and (c.drought_occurred or _severe_deficit(c)),
        headline=lambda c: "Positive SOC trend despite challenging conditions",
        body=lambda c: (
            "Notably, soil carbon increased despite adverse climate conditions "
            "during the monitoring period. This suggests the implemented management "
            "practices are effective at building soil carbon resilience even under "
            "climate stress."
        ),
    ),
    InterpretationRule(
        name="decline-normal",
        severity="alert",
        matches=lambda c: (
            _declined(c)
            and not c.drought_occurred
            and c.precip_anomaly >= MILD_DEFICIT_PCT
            and not _warm(c)
        ),
        headline=lambda c: "SOC decline during normal conditions warrants investigation",
        body=lambda c: (
            "The observed SOC decline occurred during relatively normal climate "
            "conditions (precipitation within 10% of average, no drought events). "
            "This may indicate that current management practices need review or "
            "adjustment."
        ),
    ),
    InterpretationRule(
        name="temperature-anomaly",
        severity="warning",
        matches=_warm,
        headline=lambda c: (
            f"Temperature anomaly: +{_tenths(c.temp_anomaly)}°C above average"
        ),
        body=lambda c: (
            "The monitoring period was significantly warmer than the 5-year "
            "baseline. Elevated temperatures increase soil respiration rates, which "
            "can accelerate SOC decomposition regardless of management practices."
        ),
    ),
    # The three precipitation rules below have disjoint conditions.
    InterpretationRule(
        name="precip-severe-deficit",
        severity="alert",
        matches=_severe_deficit,
        headline=lambda c: "Severe precipitation deficit",
        body=lambda c: (
            f"This region received {_pct(c.precip_anomaly)}% less precipitation "
            "than the 5-year average during the monitoring period. Extended dry "
            "conditions reduce plant productivity and root carbon inputs to soil."
        ),
    ),
    InterpretationRule(
        name="precip-mild-deficit",
        severity="neutral",
        matches=_mild_deficit,
        headline=lambda c: "Mild precipitation deficit",
        body=lambda c: (
            f"Precipitation was {_pct(c.precip_anomaly)}% below the 5-year "
            "average. This moderate deficit may have partially limited soil carbon "
            "accumulation."
        ),
    ),
    InterpretationRule(
        name="precip-surplus",
        severity="positive",
        matches=lambda c: c.precip_anomaly > WET_SURPLUS_PCT,
        headline=lambda c: "Above-average precipitation",
        body=lambda c: (
            f"Precipitation was {_pct(c.precip_anomaly)}% above the 5-year average. "
            "Increased moisture typically supports plant growth and root carbon "
            "inputs, which is favorable for SOC accumulation."
        ),
    ),
    InterpretationRule(
        name="awaiting-data",
        severity="neutral",
        matches=lambda c: not _has_soc(c),
        headline=lambda c: "Climate context ready — awaiting monitoring data",
        body=lambda c: (
            "Upload soil carbon monitoring results to generate a full contextual "
            "interpretation comparing your field data against the environmental "
            "conditions during the monitoring period."
        ),
    ),
)


def generate_interpretation(
    ctx: MonitoringContext,
    rules: tuple[InterpretationRule, ...] = INTERPRETATION_RULES,
) -> List[Interpretation]:
    """Return the interpretation of every rule that matches ``ctx``."""
    results: List[Interpretation] = []
    for rule in rules:
        interpretation = rule.apply(ctx)
        if interpretation is not None:
            results.append(interpretation)
    return results
