from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class PricePoint:
    date: str
    price: float


@dataclass(frozen=True)
class CommodityPriceData:
    """Price series for a commodity, or a context paragraph when none exists."""

    commodity: str
    prices: tuple[PricePoint, ...] = field(default_factory=tuple)
    unit: str = ""
    context_text: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commodity": self.commodity,
            "prices": [{"date": p.date, "price": p.price} for p in self.prices],
            "unit": self.unit,
            "contextText": self.context_text,
        }


__all__ = ["PricePoint", "CommodityPriceData"]
