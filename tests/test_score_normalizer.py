# /tests/test_score_normalizer.py

import pytest
from pydantic import ValidationError

from grading_app.models.grading_model import Judgment, ScoringConfig
from grading_app.services.grading_helpers.score_normalizer import (
    normalize_judgment, percentage_to_score, scoring_config_for,
)
from grading_app.db.models.simulation_models import Simulation


@pytest.fixture
def medicine_scoring():
    return ScoringConfig(correctPoints=1.5, wrongPoints=-0.4, blankPoints=0)


@pytest.mark.parametrize("correct, wrong, blank", [
    (1.0, 0.0, 0.0),
    (1.5, -0.4, 0.0),
    (2.0, -0.5, 0.25),
    (0.75, -0.25, -0.1),
])
def test_normalization_matches_point_ratios(correct, wrong, blank):
    scoring = ScoringConfig(correctPoints=correct, wrongPoints=wrong, blankPoints=blank)
    assert normalize_judgment(Judgment.CORRECT, scoring) == 1
    assert normalize_judgment(Judgment.WRONG, scoring) == pytest.approx(wrong / correct)
    assert normalize_judgment(Judgment.BLANK, scoring) == pytest.approx(blank / correct)


def test_correct_is_full_credit_regardless_of_points(medicine_scoring):
    assert normalize_judgment(Judgment.CORRECT, medicine_scoring) == 1.0


def test_wrong_answer_is_negative_fraction(medicine_scoring):
    assert normalize_judgment("wrong", medicine_scoring) == pytest.approx(-0.2667, abs=1e-4)


def test_unknown_judgment_is_rejected(medicine_scoring):
    with pytest.raises(ValueError):
        normalize_judgment("maybe", medicine_scoring)


def test_scoring_config_rejects_non_positive_correct_points():
    with pytest.raises(ValidationError):
        ScoringConfig(correctPoints=0, wrongPoints=0, blankPoints=0)


def test_scoring_config_from_simulation_row():
    simulation = Simulation(id="sim_x", title="T", correct_points=2.0, wrong_points=-0.5, blank_points=0.0)
    scoring = scoring_config_for(simulation)
    assert scoring.correctPoints == 2.0
    assert normalize_judgment(Judgment.WRONG, scoring) == -0.25


@pytest.mark.parametrize("percent, expected", [
    (0, 0.0), (100, 1.0), (50, 0.5), (37, 0.35), (38, 0.4), (120, 1.0), (-10, 0.0),
])
def test_percentage_snaps_to_five_percent_grid(percent, expected):
    assert percentage_to_score(percent) == pytest.approx(expected)

