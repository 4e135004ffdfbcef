# /grading_app/services/grading_helpers/score_normalizer.py

"""
Conversions between the two correction modes of the grading page.

Simple mode records a qualitative judgment; percentage mode records a score
on a 0..1 scale. Normalizing every judgment by the simulation's
`correctPoints` keeps the two modes mutually convertible: a stored score is
always "fraction of a correct answer's points".
"""

from typing import Union

from ...models.grading_model import Judgment, ScoringConfig

# The slider moves in 5% steps.
PERCENTAGE_STEP = 5


def normalize_judgment(judgment: Union[Judgment, str], scoring: ScoringConfig) -> float:
    """
    Returns the manual score for a simple-mode judgment.

    CORRECT is always full credit (1), regardless of the absolute point
    value. WRONG and BLANK are the configured points expressed as a fraction
    of `correctPoints`. `correctPoints > 0` is guaranteed by `ScoringConfig`.
    """
    judgment = Judgment(judgment)
    if judgment is Judgment.CORRECT:
        return 1.0
    if judgment is Judgment.WRONG:
        return scoring.wrongPoints / scoring.correctPoints
    return scoring.blankPoints / scoring.correctPoints


def percentage_to_score(percent: float) -> float:
    """Snaps a slider percentage (0-100) to the 5% grid and returns it on the 0..1 scale."""
    bounded = min(max(percent, 0), 100)
    snapped = round(bounded / PERCENTAGE_STEP) * PERCENTAGE_STEP
    return snapped / 100


def scoring_config_for(simulation) -> ScoringConfig:
    """Builds the validated scoring contract from a Simulation ORM row."""
    return ScoringConfig(
        correctPoints=simulation.correct_points,
        wrongPoints=simulation.wrong_points,
        blankPoints=simulation.blank_points,
    )
