"""Fault-tolerant, batched assessment and ranking of a project portfolio."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

from terrasignal.core.logger import Logger
from terrasignal.schemas.assessment import (
    DegradationAssessment,
    PortfolioResult,
    ProjectDescriptor,
    ProjectError,
)

DEFAULT_BATCH_SIZE = 4

A = TypeVar("A", bound=DegradationAssessment)


def assign_ranks(assessments: Iterable[A]) -> List[A]:
    """Sort by priority score (descending, stable) and set 1-based ranks."""
    ranked = sorted(assessments, key=lambda a: a.priority_score, reverse=True)
    for rank, assessment in enumerate(ranked, start=1):
        assessment.priority_rank = rank
    return ranked


def rank_portfolio(
    projects: Iterable[ProjectDescriptor],
    assess_one: Callable[[ProjectDescriptor], A],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    logger: logging.Logger | None = None,
) -> PortfolioResult:
    """Assess every project and rank the successful assessments.

    Projects are processed in consecutive batches of ``batch_size``; all
    projects of a batch run concurrently and the next batch starts only once
    every job in the current one has finished. A failing project is recorded
    in ``errors`` under its id and never affects the others.

    Parameters
    ----------
    projects:
        Projects to assess, in input order.
    assess_one:
        Callable returning a :class:`DegradationAssessment` for one project.
        Typically it fetches soil and climate data, so it may raise.
    batch_size:
        Maximum number of projects in flight at once.
    logger:
        Optional logger for progress and failure messages.
    """
    log = logger or Logger.get_logger(__name__)
    items = list(projects)
    width = max(1, int(batch_size))
    successes: List[A] = []
    errors: List[ProjectError] = []

    for start in range(0, len(items), width):
        batch = items[start : start + width]
        log.info(
            "Assessing projects %d-%d of %d", start + 1, start + len(batch), len(items)
        )
        with ThreadPoolExecutor(max_workers=len(batch)) as ex:
            futures = [ex.submit(assess_one, project) for project in batch]
            for project, future in zip(batch, futures):
                try:
                    successes.append(future.result())
                # pylint: disable=broad-exception-caught
                except Exception as err:
                    log.warning(
                        "Assessment failed: %s", err, extra={"project_id": project.id}
                    )
                    errors.append(ProjectError(project_id=project.id, error=str(err)))

    ranked = assign_ranks(successes)
    log.info("Ranked %d of %d projects", len(ranked), len(items))
    return PortfolioResult(
        assessments=list(ranked),
        errors=errors,
        total_projects=len(items),
        success_count=len(ranked),
    )
