"""Rule-based climate context for observed SOC changes."""

from .context import build_monitoring_context
from .rules import INTERPRETATION_RULES, InterpretationRule, generate_interpretation

__all__ = [
    "INTERPRETATION_RULES",
    "InterpretationRule",
    "build_monitoring_context",
    "generate_interpretation",
]
