from __future__ import annotations

"""World Bank commodity price client with contextual fallbacks."""

from typing import Dict

from terrasignal.core.utils import round_half_up
from terrasignal.schemas.commodity import CommodityPriceData, PricePoint
from .base import BaseClient, ProviderError

# Commodities without a public World Bank indicator map to None
COMMODITY_INDICATORS: Dict[str, str | None] = {
    "cotton": "COTTON_A_INDX",
    "wool": None,
    "cashmere": None,
    "leather": None,
}

COMMODITY_CONTEXT: Dict[str, str] = {
    "cashmere": (
        "Mongolia supplies approximately 40% of global cashmere demand. About 80% "
        "is exported unprocessed, and roughly 70% of pastureland shows signs of "
        "degradation. The Sustainable Fibre Alliance (SFA) has certified over "
        "21,500 herders across 17 provinces. Premium certified cashmere commands "
        "10-15% price premiums over conventional."
    ),
    "wool": (
        "Global wool production is approximately 1.1 million tonnes annually. "
        "Australia leads production (25%), followed by China (18%). Fine merino "
        "wool trades at significant premiums; Wildlife Friendly-certified wool "
        "from Patagonia commands 15% premiums. The wool market has seen moderate "
        "price recovery since 2020 lows."
    ),
    "leather": (
        "Global leather industry valued at approximately $400B. The Gran Chaco "
        "region in Argentina faces acute deforestation pressure from cattle "
        "ranching. Sustainable leather certification is emerging but not yet "
        "standardized. Note: Leather was dropped from the fund's 2025 eligible "
        "commodities list."
    ),
}

# Approximate Cotton A-Index annual values, US cents/lb
COTTON_FALLBACK_PRICES: tuple[tuple[str, float], ...] = (
    ("2019", 75.2),
    ("2020", 68.4),
    ("2021", 102.8),
    ("2022", 128.3),
    ("2023", 95.7),
    ("2024", 88.1),
)
PRICE_DATE_RANGE = "2019:2025"


def cotton_fallback() -> CommodityPriceData:
    return CommodityPriceData(
        commodity="cotton",
        prices=tuple(PricePoint(d, p) for d, p in COTTON_FALLBACK_PRICES),
        unit="US cents/lb (approximate)",
        context_text=(
            "Cotton A-Index approximate values. Global cotton production ~25M "
            "tonnes annually. India is the largest producer. Organic cotton "
            "commands 10-20% premiums."
        ),
    )


class WorldBankClient(BaseClient):
    """Fetch commodity price series from the World Bank indicators API."""

    provider = "World Bank"
    url_key = "world_bank"
    SOURCE = "World Bank Commodity API"
    CONTEXT_SOURCE = "Contextual data (no public price API)"

    def get_prices(self, commodity: str) -> CommodityPriceData:
        """Return prices for ``commodity`` or a context paragraph.

        Commodities without an indicator get their static context text. A
        malformed response, and for cotton any failure, yields the
        approximate cotton series.
        """
        indicator = COMMODITY_INDICATORS.get(commodity)
        if not indicator:
            return CommodityPriceData(
                commodity=commodity,
                context_text=COMMODITY_CONTEXT.get(
                    commodity, f"No public price data available for {commodity}."
                ),
            )

        url = f"{self.base_url}/{indicator}"
        params = {"date": PRICE_DATE_RANGE, "format": "json", "per_page": 100}
        try:
            data = self.get_json(url, params)
        except ProviderError as err:
            self.logger.warning(
                "Prices unavailable for %s: %s",
                commodity,
                err,
                extra={"provider": self.provider},
            )
            if commodity == "cotton":
                return cotton_fallback()
            return CommodityPriceData(
                commodity=commodity,
                context_text=COMMODITY_CONTEXT.get(
                    commodity, f"Price data temporarily unavailable for {commodity}."
                ),
            )

        # The API answers with [metadata, rows]
        if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
            self.logger.warning(
                "Unexpected payload for %s", commodity, extra={"provider": self.provider}
            )
            return cotton_fallback()

        points = sorted(
            (
                PricePoint(date=str(row["date"]), price=round_half_up(float(row["value"]), 2))
                for row in data[1]
                if row.get("value") is not None
            ),
            key=lambda p: p.date,
        )
        return CommodityPriceData(
            commodity=commodity, prices=tuple(points), unit="US cents/lb"
        )
