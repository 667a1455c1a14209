import threading
import time
from unittest.mock import MagicMock

import pytest

from terrasignal.restoration.portfolio import assign_ranks, rank_portfolio
from terrasignal.schemas.assessment import DegradationAssessment, ProjectDescriptor


def _assessment(project_id, score):
    return DegradationAssessment(
        project_id=project_id,
        current_soc_t_per_ha=20.0,
        soil_texture="Loam",
        reference_soc_t_per_ha=45.0,
        soc_deficit_t_per_ha=25.0,
        soc_deficit_percent=56,
        potential_soc_gain_t_per_ha=20.0,
        potential_co2e_t_per_ha=73.4,
        time_to_restore_years=40,
        carbon_value_usd_per_ha=1101,
        productivity_gain_percent=28,
        priority_score=score,
    )


def _projects(n):
    return [ProjectDescriptor(f"p{i}", f"Project {i}", "wool", 100, 0, 0) for i in range(n)]


def test_ranks_successes_and_records_failures():
    scores = {"p0": 40, "p1": 90, "p3": 65, "p4": 10}

    def assess_one(project):
        if project.id == "p2":
            raise RuntimeError("Missing data: soil=false, climate=true")
        return _assessment(project.id, scores[project.id])

    result = rank_portfolio(_projects(5), assess_one, batch_size=2)

    assert result.total_projects == 5
    assert result.success_count == 4
    assert [a.project_id for a in result.assessments] == ["p1", "p3", "p0", "p4"]
    assert [a.priority_rank for a in result.assessments] == [1, 2, 3, 4]
    assert result.assessments[0].priority_score == max(scores.values())
    assert len(result.errors) == 1
    assert result.errors[0].project_id == "p2"
    assert "soil=false" in result.errors[0].error


def test_all_failures_are_attributed():
    logger = MagicMock()

    def assess_one(project):
        raise ValueError(f"boom {project.id}")

    result = rank_portfolio(_projects(3), assess_one, logger=logger)
    assert result.assessments == []
    assert [e.project_id for e in result.errors] == ["p0", "p1", "p2"]
    assert [e.error for e in result.errors] == ["boom p0", "boom p1", "boom p2"]
    assert logger.warning.call_count == 3
    tagged = [c.kwargs["extra"]["project_id"] for c in logger.warning.call_args_list]
    assert tagged == ["p0", "p1", "p2"]


def test_ties_keep_input_order():
    ranked = assign_ranks([_assessment("a", 50), _assessment("b", 70), _assessment("c", 50)])
    assert [(a.project_id, a.priority_rank) for a in ranked] == [("b", 1), ("a", 2), ("c", 3)]


@pytest.mark.parametrize("batch_size", [1, 2, 4])
def test_batches_never_exceed_width(batch_size):
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}

    def assess_one(project):
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.01)
        with lock:
            state["active"] -= 1
        return _assessment(project.id, 10)

    result = rank_portfolio(_projects(7), assess_one, batch_size=batch_size)
    assert result.success_count == 7
    assert state["peak"] <= batch_size


def test_empty_portfolio():
    result = rank_portfolio([], MagicMock())
    assert result.total_projects == 0
    assert result.to_dict() == {
        "assessments": [],
        "totalProjects": 0,
        "successCount": 0,
        "errors": [],
    }
