# /grading_app/services/grading_service.py

"""
This module defines the GradingService, the orchestrator of the open-answer
grading workflow: reading a result for review, validating answers one at a
time or in an atomic batch, and reporting the pending-review backlog.

Every method receives the authenticated principal. Staff access is scoped
(admins see everything, collaborators only their own simulations) and the
scope is threaded down to every repository read. Mutations validate all
their inputs before touching any row, then apply the changes and recalculate
the parent result inside a single commit; any failure rolls the session back.
"""

import uuid, datetime, logging
from collections import Counter
from fastapi import Depends
from typing import List, Dict, Optional

from .database_service import DatabaseService, get_db_service
from ..core.config import PENDING_REVIEW_POLL_INTERVAL_SECONDS
from ..core.exceptions import NotFoundError, InvalidStateError, PermissionDeniedError
from ..models import grading_model
from .grading_helpers import score_normalizer, score_recalculation, keyword_matcher, data_assembly

logger = logging.getLogger(__name__)


def grader_scope_for(user) -> Optional[str]:
    """None for unrestricted access, otherwise the creator id results must match."""
    return None if user.role == grading_model.UserRole.ADMIN.value else user.id


def is_staff(user) -> bool:
    return user.role in grading_model.STAFF_ROLES


class GradingService:
    def __init__(self, db: DatabaseService = Depends(get_db_service)):
        self.db = db

    # --- READ MODEL ---
    def get_open_answers_for_result(self, result_id: str, user) -> Dict:
        """The grading page payload. Staff in scope, or the owning student, may read it."""
        if is_staff(user):
            result = self.db.get_result(result_id, grader_scope_for(user))
        else:
            result = self.db.get_result(result_id)
            if result and result.student_id != user.id:
                result = None
        if not result:
            raise NotFoundError(f"Result {result_id} not found or access denied.")
        return data_assembly._build_result_review(result)

    # --- SINGLE VALIDATION ---
    def validate_open_answer(self, validation: grading_model.OpenAnswerValidation, grader) -> Dict:
        """Validates exactly one pending open answer and reconciles its result."""
        open_answer = self.db.get_open_answer(validation.openAnswerId)
        result = self.db.get_result(open_answer.result_id, grader_scope_for(grader)) if open_answer else None
        if not result:
            raise NotFoundError(f"Open answer {validation.openAnswerId} not found or access denied.")
        if open_answer.is_validated:
            logger.warning("Rejected re-validation of open answer %s by %s", open_answer.id, grader.id)
            raise InvalidStateError(f"Open answer {open_answer.id} has already been validated.")

        manual_score = self._resolve_manual_score(validation, result.simulation)
        try:
            score_recalculation.apply_manual_grade(open_answer, manual_score, validation.validatorNotes, grader.id)
            score_recalculation.recalculate_result(result, result.simulation.correct_points)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to persist validation of open answer %s", validation.openAnswerId)
            raise

        logger.info(
            "Open answer %s validated by %s with score %.4f; result %s has %d pending",
            open_answer.id, grader.id, manual_score, result.id, result.pending_open_answers,
        )
        return {
            "openAnswer": data_assembly.open_answer_detail(open_answer),
            "result": data_assembly.score_summary(result),
        }

    # --- BATCH VALIDATION ---
    def validate_open_answers_batch(self, request: grading_model.BatchValidationRequest, grader) -> Dict:
        """
        Validates a set of pending answers of one result, all or nothing.

        Rejected before any write: an unknown result or answer (NotFound), an
        answer of another result, an already validated answer, or the same
        answer twice (InvalidState).
        """
        result = self.db.get_result(request.resultId, grader_scope_for(grader))
        if not result:
            raise NotFoundError(f"Result {request.resultId} not found or access denied.")

        answers_by_id = {oa.id: oa for oa in result.open_answers}
        requested_ids = [v.openAnswerId for v in request.validations]
        self._check_batch_entries(result.id, requested_ids, answers_by_id)

        entries = [
            {
                "openAnswerId": v.openAnswerId,
                "manualScore": self._resolve_manual_score(v, result.simulation),
                "validatorNotes": v.validatorNotes,
            }
            for v in request.validations
        ]
        if request.fillRemaining:
            submitted = {e["openAnswerId"]: e for e in entries}
            entries = score_recalculation.build_default_validations(
                data_assembly.order_open_answers(result.open_answers), submitted
            )

        now = datetime.datetime.now(datetime.timezone.utc)
        try:
            for entry in entries:
                score_recalculation.apply_manual_grade(
                    answers_by_id[entry["openAnswerId"]], entry["manualScore"],
                    entry["validatorNotes"], grader.id, now,
                )
            score_recalculation.recalculate_result(result, result.simulation.correct_points)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to persist batch validation for result %s", request.resultId)
            raise

        summary = data_assembly.score_summary(result)
        logger.info(
            "Batch of %d validations applied to result %s by %s; %d pending (%s)",
            len(entries), result.id, grader.id, summary["remainingPending"], summary["gradingStatus"].value,
        )
        return {**summary, "validatedCount": len(entries)}

    def _check_batch_entries(self, result_id: str, requested_ids: List[str], answers_by_id: Dict):
        duplicates = sorted(i for i, count in Counter(requested_ids).items() if count > 1)
        if duplicates:
            raise InvalidStateError(f"Open answers submitted more than once in the same batch: {', '.join(duplicates)}")

        foreign_ids = [i for i in requested_ids if i not in answers_by_id]
        if foreign_ids:
            existing = set(self.db.get_existing_open_answer_ids(foreign_ids))
            missing = [i for i in foreign_ids if i not in existing]
            if missing:
                raise NotFoundError(f"Open answers not found: {', '.join(missing)}")
            logger.warning("Rejected batch for result %s: foreign answers %s", result_id, foreign_ids)
            raise InvalidStateError(f"Open answers do not belong to result {result_id}: {', '.join(foreign_ids)}")

        already_validated = [i for i in requested_ids if answers_by_id[i].is_validated]
        if already_validated:
            logger.warning("Rejected batch for result %s: already validated %s", result_id, already_validated)
            raise InvalidStateError(f"Open answers already validated: {', '.join(already_validated)}")

    def _resolve_manual_score(self, validation: grading_model.OpenAnswerValidation, simulation) -> float:
        if validation.judgment is not None:
            return score_normalizer.normalize_judgment(
                validation.judgment, score_normalizer.scoring_config_for(simulation)
            )
        if validation.percentage is not None:
            return score_normalizer.percentage_to_score(validation.percentage)
        return validation.manualScore

    # --- PENDING REVIEW AGGREGATION ---
    def get_results_with_pending_reviews(self, limit: int, offset: int, grader) -> Dict:
        scope = grader_scope_for(grader)
        total = self.db.count_results_with_pending_reviews(scope)
        page = self.db.get_results_with_pending_reviews(limit=limit, offset=offset, grader_scope=scope)
        items = data_assembly._assemble_pending_items(page)
        return {
            "total": total,
            "results": items,
            "bySimulation": data_assembly._group_pending_by_simulation(items),
        }

    def get_pending_review_count(self, grader) -> Dict:
        total = self.db.count_results_with_pending_reviews(grader_scope_for(grader))
        return {
            "total": total,
            "displayTotal": data_assembly.format_pending_badge(total),
            "pollIntervalSeconds": PENDING_REVIEW_POLL_INTERVAL_SECONDS,
        }

    # --- RESULT INTAKE ---
    def record_result(self, request: grading_model.ResultCreateRequest, user) -> Dict:
        """
        Stores a finished attempt on behalf of a student. Only staff in scope
        may record one, since the base and max scores are taken as given.
        Non-blank open answers are auto-scored by keyword matching and wait
        for validation; blank ones are settled immediately with the
        simulation's blank points.
        """
        if not is_staff(user):
            raise PermissionDeniedError("Only staff can record results.")
        simulation = self.db.get_simulation(request.simulationId)
        if simulation and grader_scope_for(user) not in (None, simulation.creator_id):
            simulation = None
        if not simulation:
            raise NotFoundError(f"Simulation {request.simulationId} not found or access denied.")
        student = self.db.get_user(request.studentId)
        if not student:
            raise NotFoundError(f"Student {request.studentId} not found.")
        if student.role != grading_model.UserRole.STUDENT.value:
            raise ValueError(f"User {request.studentId} is not a student.")

        questions = self.db.get_questions_by_ids([oa.questionId for oa in request.openAnswers])
        missing = sorted({oa.questionId for oa in request.openAnswers if oa.questionId not in questions})
        if missing:
            raise NotFoundError(f"Questions not found: {', '.join(missing)}")

        base_score = request.baseScore
        open_answer_records = []
        for position, submission in enumerate(request.openAnswers):
            if keyword_matcher.is_blank_answer(submission.answerText):
                base_score += simulation.blank_points
                continue
            auto_score, matched, missed = keyword_matcher.auto_score_open_answer(
                submission.answerText, questions[submission.questionId].keywords
            )
            open_answer_records.append({
                "id": f"oa_{uuid.uuid4().hex[:16]}",
                "question_id": submission.questionId,
                "position": position,
                "answer_text": submission.answerText,
                "auto_score": auto_score,
                "keywords_matched": matched,
                "keywords_missed": missed,
                "is_validated": False,
            })

        record = {
            "id": f"res_{uuid.uuid4().hex[:16]}",
            "simulation_id": simulation.id,
            "student_id": request.studentId,
            "completed_at": request.completedAt or datetime.datetime.now(datetime.timezone.utc),
            "base_score": base_score,
            "max_score": request.maxScore,
        }
        try:
            result = self.db.add_result(record, open_answer_records)
            score_recalculation.recalculate_result(result, simulation.correct_points)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to record result for student %s on simulation %s", request.studentId, simulation.id)
            raise

        logger.info("Recorded result %s with %d open answers pending review", result.id, result.pending_open_answers)
        return data_assembly._build_result_review(self.db.get_result(result.id))


# --- DEPENDENCY PROVIDER ---
def get_grading_service(db: DatabaseService = Depends(get_db_service)):
    """Dependency provider for the GradingService."""
    return GradingService(db=db)
