# /tests/test_score_recalculation.py

import datetime
import pytest

from grading_app.db.models.simulation_models import SimulationResult, OpenAnswer
from grading_app.models.grading_model import GradingStatus
from grading_app.services.grading_helpers import score_recalculation

# --- Test Data Fixtures ---

@pytest.fixture
def result_with_answers():
    """An in-memory result with three pending answers; nothing touches the database."""
    result = SimulationResult(id="res_mem", base_score=3.0, max_score=7.5)
    result.open_answers = [
        OpenAnswer(id="oa_a", position=0, auto_score=0.8, is_validated=False),
        OpenAnswer(id="oa_b", position=1, auto_score=None, is_validated=False),
        OpenAnswer(id="oa_c", position=2, auto_score=0.3, is_validated=False),
    ]
    return result


# --- Unit Tests ---

@pytest.mark.parametrize("total, pending, expected", [
    (3, 3, GradingStatus.ALL_PENDING),
    (3, 1, GradingStatus.PARTIALLY_GRADED),
    (3, 0, GradingStatus.FULLY_GRADED),
    (0, 0, GradingStatus.FULLY_GRADED),
])
def test_grading_status(total, pending, expected):
    assert score_recalculation.grading_status(total, pending) is expected


def test_apply_manual_grade_sets_validation_fields(result_with_answers):
    oa = result_with_answers.open_answers[0]
    when = datetime.datetime(2026, 10, 19, 9, 30, tzinfo=datetime.timezone.utc)
    score_recalculation.apply_manual_grade(oa, 0.5, "parziale", "usr_collab", when)
    assert oa.is_validated is True
    assert oa.final_score == 0.5
    assert oa.validated_at == when
    assert oa.validator_notes == "parziale"
    assert oa.validator_id == "usr_collab"
    assert oa.auto_score == 0.8


def test_recalculate_counts_only_validated_answers(result_with_answers):
    score_recalculation.recalculate_result(result_with_answers, correct_points=1.5)
    assert result_with_answers.total_score == 3.0
    assert result_with_answers.percentage_score == 40.0
    assert result_with_answers.pending_open_answers == 3

    score_recalculation.apply_manual_grade(result_with_answers.open_answers[0], 1.0, None, "usr_admin")
    score_recalculation.recalculate_result(result_with_answers, correct_points=1.5)
    assert result_with_answers.total_score == 4.5
    assert result_with_answers.percentage_score == 60.0
    assert result_with_answers.pending_open_answers == 2
    assert score_recalculation.grading_status_for(result_with_answers) is GradingStatus.PARTIALLY_GRADED


def test_negative_manual_score_reduces_total(result_with_answers):
    score_recalculation.apply_manual_grade(result_with_answers.open_answers[1], -0.4 / 1.5, None, "usr_admin")
    score_recalculation.recalculate_result(result_with_answers, correct_points=1.5)
    assert result_with_answers.total_score == pytest.approx(2.6)


def test_zero_max_score_gives_zero_percentage():
    result = SimulationResult(id="res_zero", base_score=1.0, max_score=0.0)
    result.open_answers = []
    score_recalculation.recalculate_result(result, correct_points=1.0)
    assert result.percentage_score == 0.0
    assert result.pending_open_answers == 0


def test_build_default_validations_prefers_submitted_then_auto_score(result_with_answers):
    result_with_answers.open_answers[2].is_validated = True
    validations = score_recalculation.build_default_validations(
        result_with_answers.open_answers,
        {"oa_b": {"manualScore": 0.75, "validatorNotes": "buona"}},
    )
    assert validations == [
        {"openAnswerId": "oa_a", "manualScore": 0.8, "validatorNotes": None},
        {"openAnswerId": "oa_b", "manualScore": 0.75, "validatorNotes": "buona"},
    ]


def test_build_default_validations_defaults_missing_auto_score_to_zero(result_with_answers):
    validations = score_recalculation.build_default_validations(result_with_answers.open_answers, {})
    assert [v["manualScore"] for v in validations] == [0.8, 0.0, 0.3]
