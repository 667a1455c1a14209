from terrasignal.ingestion.worldbank import (
    COMMODITY_CONTEXT,
    COTTON_FALLBACK_PRICES,
    WorldBankClient,
)


def test_cotton_prices_sorted_and_rounded(session_cls, response_cls, no_sleep):
    payload = [
        {"page": 1},
        [
            {"date": "2021", "value": 101.234},
            {"date": "2019", "value": 70.006},
            {"date": "2020", "value": None},
        ],
    ]
    session = session_cls(response_cls(payload))
    data = WorldBankClient(session=session).get_prices("cotton")

    assert [(p.date, p.price) for p in data.prices] == [("2019", 70.01), ("2021", 101.23)]
    assert data.unit == "US cents/lb"
    assert session.calls[0]["url"].endswith("/indicator/COTTON_A_INDX")
    assert session.calls[0]["params"]["date"] == "2019:2025"


def test_commodity_without_indicator_returns_context(session_cls):
    session = session_cls()
    data = WorldBankClient(session=session).get_prices("cashmere")
    assert data.prices == ()
    assert data.context_text == COMMODITY_CONTEXT["cashmere"]
    assert session.calls == []


def test_unknown_commodity_message(session_cls):
    data = WorldBankClient(session=session_cls()).get_prices("silk")
    assert data.context_text == "No public price data available for silk."


def test_failure_uses_cotton_fallback(session_cls, response_cls, no_sleep):
    session = session_cls(response_cls(status_code=400, reason="Bad Request"))
    data = WorldBankClient(session=session).get_prices("cotton")
    assert len(data.prices) == len(COTTON_FALLBACK_PRICES)
    assert data.unit == "US cents/lb (approximate)"


def test_malformed_payload_uses_cotton_fallback(session_cls, response_cls, no_sleep):
    session = session_cls(response_cls([{"message": "invalid"}]))
    data = WorldBankClient(session=session).get_prices("cotton")
    assert data.prices[0].date == "2019"
    assert data.context_text.startswith("Cotton A-Index")
