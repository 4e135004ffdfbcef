# /grading_app/services/grading_helpers/data_assembly.py

from typing import List, Dict
import logging
import pandas as pd

from ...core.config import PENDING_BADGE_CAP
from .score_recalculation import grading_status_for

logger = logging.getLogger(__name__)


def _user_summary(user) -> Dict:
    return {"id": user.id, "name": user.name, "email": user.email}

def _simulation_summary(simulation) -> Dict:
    return {
        "id": simulation.id, "title": simulation.title,
        "correctPoints": simulation.correct_points,
        "wrongPoints": simulation.wrong_points,
        "blankPoints": simulation.blank_points,
    }

def _question_detail(question) -> Dict:
    return {
        "id": question.id, "text": question.text,
        "textLatex": question.text_latex,
        "correctExplanation": question.correct_explanation,
        "keywords": question.keywords or [],
    }

def order_open_answers(open_answers: List['OpenAnswer']) -> List['OpenAnswer']:
    """Pending answers first, then validated ones; each group keeps the attempt order."""
    return sorted(open_answers, key=lambda oa: (bool(oa.is_validated), oa.position))

def open_answer_detail(open_answer) -> Dict:
    return {
        "id": open_answer.id,
        "resultId": open_answer.result_id,
        "position": open_answer.position,
        "question": _question_detail(open_answer.question),
        "answerText": open_answer.answer_text,
        "autoScore": open_answer.auto_score,
        "keywordsMatched": open_answer.keywords_matched or [],
        "keywordsMissed": open_answer.keywords_missed or [],
        "isValidated": bool(open_answer.is_validated),
        "finalScore": open_answer.final_score,
        "validatorNotes": open_answer.validator_notes,
        "validatedAt": open_answer.validated_at,
    }

def score_summary(result) -> Dict:
    return {
        "resultId": result.id,
        "remainingPending": result.pending_open_answers,
        "gradingStatus": grading_status_for(result),
        "totalScore": result.total_score,
        "percentageScore": result.percentage_score,
    }

def _build_result_review(result) -> Dict:
    """Specialist for the grading page payload of a single result."""
    return {
        "id": result.id,
        "completedAt": result.completed_at,
        "baseScore": result.base_score,
        "maxScore": result.max_score,
        "totalScore": result.total_score,
        "percentageScore": result.percentage_score,
        "pendingOpenAnswers": result.pending_open_answers,
        "gradingStatus": grading_status_for(result),
        "student": _user_summary(result.student),
        "simulation": _simulation_summary(result.simulation),
        "openAnswers": [open_answer_detail(oa) for oa in order_open_answers(result.open_answers)],
    }

def _assemble_pending_items(results: List['SimulationResult']) -> List[Dict]:
    """Specialist for the rows of the pending-review list."""
    items = []
    for result in results:
        try:
            items.append({
                "id": result.id,
                "completedAt": result.completed_at,
                "totalScore": result.total_score,
                "percentageScore": result.percentage_score,
                "pendingOpenAnswers": result.pending_open_answers,
                "student": _user_summary(result.student),
                "simulation": _simulation_summary(result.simulation),
            })
        except AttributeError as e:
            logger.warning("Skipping pending result %s with incomplete relations: %s", getattr(result, 'id', 'N/A'), e)
    return items

def _group_pending_by_simulation(items: List[Dict]) -> List[Dict]:
    """Per-simulation totals for a page of pending results, largest backlog first."""
    if not items:
        return []
    df = pd.DataFrame([
        {"simulationId": i["simulation"]["id"], "title": i["simulation"]["title"], "pending": i["pendingOpenAnswers"]}
        for i in items
    ])
    grouped = (
        df.groupby(["simulationId", "title"], sort=False)
        .agg(results=("pending", "size"), pendingAnswers=("pending", "sum"))
        .reset_index()
        .sort_values(["pendingAnswers", "results"], ascending=False, kind="stable")
    )
    return [
        {"simulationId": row.simulationId, "title": row.title,
         "results": int(row.results), "pendingAnswers": int(row.pendingAnswers)}
        for row in grouped.itertuples(index=False)
    ]

def format_pending_badge(total: int, cap: int = PENDING_BADGE_CAP) -> str:
    return f"{cap}+" if total > cap else str(total)
