import json

import pytest

from terrasignal.compliance.checklist import (
    SOIL_CARBON_CHECKLIST,
    compute_score,
    group_by_category,
    normalize_submission,
    run_checklist,
    score_label,
)
from terrasignal.schemas.submission import NormalizedSubmission, UploadFormData


@pytest.fixture
def complete_form():
    return UploadFormData(
        number_of_strata=3,
        stratification_factors=["soil type", "practice"],
        samples_per_stratum=8,
        max_depth_cm=30,
        lab_method="dry_combustion",
        bulk_density_approach="measured",
        qaqc_methods=["lab duplicates", "reference samples"],
        gps_coordinates=True,
        baseline_date="2021-05-14",
        project_start_year=2022,
        verification_frequency_years=5,
    )


def _result(results, item_id):
    return next(r.result for r in results if r.item.id == item_id)


def test_catalogue_shape():
    assert len(SOIL_CARBON_CHECKLIST) == 9
    severities = [i.severity for i in SOIL_CARBON_CHECKLIST]
    assert severities.count("required") == 8
    assert severities.count("recommended") == 1


def test_fully_compliant_scores_100(complete_form):
    results = run_checklist(complete_form)
    assert all(r.result == "compliant" for r in results)
    assert compute_score(results) == 100
    assert score_label(100) == "Claims-ready"


def test_empty_submission_scores_zero():
    form = UploadFormData(max_depth_cm=None)
    results = run_checklist(form)
    assert compute_score(results) == 0
    assert _result(results, "soc-depth") == "off-spec"
    assert _result(results, "soc-lab-method") == "missing"
    assert _result(results, "soc-baseline-timing") == "missing"
    assert _result(results, "soc-frequency") == "off-spec"
    assert _result(results, "soc-statistical") == "off-spec"


def test_recommended_gap_costs_ten_points(complete_form):
    complete_form.qaqc_methods = ["lab duplicates"]
    results = run_checklist(complete_form)
    assert _result(results, "soc-qaqc") == "missing"
    assert compute_score(results) == 90


def test_single_required_gap(complete_form):
    complete_form.bulk_density_approach = "estimated"
    results = run_checklist(complete_form)
    # 7/8 * 90 + 10 = 88.75
    assert compute_score(results) == 89


@pytest.mark.parametrize(
    "baseline,start,expected",
    [
        ("2017-01-01", 2022, "compliant"),
        ("2016-12-31", 2022, "off-spec"),
        ("2027-03-01", 2022, "compliant"),
        ("not a date", 2022, "missing"),
        ("2020-01-01", None, "missing"),
    ],
)
def test_baseline_timing(baseline, start, expected):
    form = UploadFormData(baseline_date=baseline, project_start_year=start)
    assert _result(run_checklist(form), "soc-baseline-timing") == expected


def test_esm_counts_as_measured():
    submission = normalize_submission(UploadFormData(bulk_density_approach="ESM"))
    assert submission.bulk_density_measured is True


def test_stratification_needs_factors_and_strata():
    s = normalize_submission(UploadFormData(number_of_strata=0, stratification_factors=["x"]))
    assert s.stratification_documented is False
    s = normalize_submission(UploadFormData(number_of_strata=2))
    assert s.stratification_documented is False


def test_accepts_normalized_submission():
    s = NormalizedSubmission(max_depth_cm=45, verification_frequency_years=3)
    results = run_checklist(s)
    assert _result(results, "soc-depth") == "compliant"
    assert _result(results, "soc-frequency") == "compliant"


def test_score_without_items():
    assert compute_score([]) == 0
    recommended_only = [i for i in SOIL_CARBON_CHECKLIST if i.severity == "recommended"]
    assert compute_score(run_checklist(UploadFormData(), recommended_only)) == 0


def test_score_without_recommended_items(complete_form):
    required = [i for i in SOIL_CARBON_CHECKLIST if i.severity == "required"]
    assert compute_score(run_checklist(complete_form, required)) == 100


@pytest.mark.parametrize(
    "score,label", [(80, "Claims-ready"), (79, "Needs attention"), (50, "Needs attention"), (49, "Significant gaps")]
)
def test_score_label(score, label):
    assert score_label(score) == label


def test_group_by_category_keeps_catalogue_order(complete_form):
    grouped = group_by_category(run_checklist(complete_form))
    assert list(grouped) == ["Sampling", "Laboratory", "Spatial", "Design", "Temporal", "Quality"]
    assert [r.item.id for r in grouped["Sampling"]] == ["soc-depth", "soc-bulk-density"]


def test_form_from_camel_case_file(tmp_path):
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(
            {
                "maxDepthCm": 60,
                "labMethod": "walkley_black",
                "qaqcMethods": ["a", "b"],
                "meanSOC": 31.2,
                "gpsCoordinates": True,
                "unknownField": 1,
            }
        ),
        encoding="utf-8",
    )
    form = UploadFormData.from_file(str(path))
    assert form.max_depth_cm == 60
    assert form.lab_method == "walkley_black"
    assert form.qaqc_methods == ["a", "b"]
    assert form.mean_soc == pytest.approx(31.2)
    assert form.gps_coordinates is True


def test_form_from_unsupported_file(tmp_path):
    path = tmp_path / "form.txt"
    path.write_text("maxDepthCm: 30", encoding="utf-8")
    with pytest.raises(ValueError):
        UploadFormData.from_file(str(path))
