from unittest.mock import MagicMock

from terrasignal.schemas.submission import UploadFormData
from terrasignal.services.compliance import ComplianceService
from terrasignal.services.interpretation import InterpretationService


def test_compliance_service_envelope():
    out = ComplianceService().validate(UploadFormData())
    # only the default 30 cm depth complies: 1/8 * 90
    assert out["score"] == 11
    assert out["label"] == "Significant gaps"
    assert len(out["results"]) == 9
    assert list(out["byCategory"])[0] == "Sampling"


def test_interpretation_service(make_series):
    client = MagicMock()
    # two years of daily rain; the second June is completely dry
    precip = [3.0] * 730
    for day in range(516, 546):
        precip[day] = 0.0
    client.get_climate.return_value = make_series("2021-01-01", precip)

    out = InterpretationService(climate_client=client).interpret(
        10.0, 20.0, "2022-06", "2022-06", soc_change=-2.1, soc_change_percent=-5.0
    )

    assert out["success"] is True
    assert out["anomalies"]["precipAnomaly"] == -100.0
    assert out["context"]["moistureDeficit"] is True
    assert out["context"]["droughtOccurred"] is True
    assert [m["month"] for m in out["monthlyAnomalies"]] == ["2022-06"]
    headlines = [i["headline"] for i in out["interpretations"]]
    assert headlines[0] == "SOC decline consistent with drought conditions"
    assert "Severe precipitation deficit" in headlines
