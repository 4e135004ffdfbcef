# /grading_app/services/grading_helpers/score_recalculation.py

"""
The state changes behind a grading transition: marking an open answer as
validated and reconciling the parent result's aggregates.

These helpers only mutate ORM objects in memory; the caller owns the
transaction and commits (or rolls back) once for the whole operation.
"""

import datetime
from typing import Iterable, List, Dict, Optional

from ...models.grading_model import GradingStatus


def grading_status(total_answers: int, pending: int) -> GradingStatus:
    if pending <= 0:
        return GradingStatus.FULLY_GRADED
    if pending >= total_answers:
        return GradingStatus.ALL_PENDING
    return GradingStatus.PARTIALLY_GRADED


def grading_status_for(result) -> GradingStatus:
    return grading_status(len(result.open_answers), result.pending_open_answers)


def apply_manual_grade(
    open_answer,
    manual_score: float,
    validator_notes: Optional[str],
    validator_id: Optional[str],
    now: Optional[datetime.datetime] = None,
):
    """Moves one pending answer to validated. The auto score is left untouched for audit."""
    open_answer.final_score = manual_score
    open_answer.is_validated = True
    open_answer.validated_at = now or datetime.datetime.now(datetime.timezone.utc)
    open_answer.validator_notes = validator_notes
    open_answer.validator_id = validator_id


def recalculate_result(result, correct_points: float):
    """
    Recomputes total, percentage and pending count from the result's answers.

    Validated answers are worth `final_score * correct_points`; pending
    answers contribute nothing until graded.
    """
    open_points = sum(
        (oa.final_score or 0.0) * correct_points
        for oa in result.open_answers
        if oa.is_validated
    )
    total = (result.base_score or 0.0) + open_points
    max_score = result.max_score or 0.0

    result.total_score = round(total, 2)
    result.percentage_score = round(total / max_score * 100, 2) if max_score > 0 else 0.0
    result.pending_open_answers = sum(1 for oa in result.open_answers if not oa.is_validated)
    return result


def build_default_validations(open_answers: Iterable, submitted: Dict[str, Dict]) -> List[Dict]:
    """
    Fills a batch for every pending answer: the grader's in-progress entry when
    there is one, otherwise the auto score (0 when the matcher had no keywords).
    `submitted` maps openAnswerId -> {"manualScore": ..., "validatorNotes": ...}.
    """
    validations = []
    for oa in open_answers:
        if oa.is_validated:
            continue
        entry = submitted.get(oa.id, {})
        manual_score = entry.get("manualScore")
        if manual_score is None:
            manual_score = oa.auto_score if oa.auto_score is not None else 0.0
        validations.append({
            "openAnswerId": oa.id,
            "manualScore": manual_score,
            "validatorNotes": entry.get("validatorNotes"),
        })
    return validations
