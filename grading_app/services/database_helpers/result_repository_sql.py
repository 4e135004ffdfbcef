# /grading_app/services/database_helpers/result_repository_sql.py

"""
This module contains the SQLAlchemy queries for simulation results and
their open answers.

Every read that serves a grader accepts a `grader_scope`: None means the
caller may see every result (admins), a user id restricts the query to
results of simulations created by that user (collaborators). Results outside
the scope are indistinguishable from missing ones.
"""

from typing import List, Dict, Optional
from sqlalchemy.orm import Session, joinedload, selectinload

from grading_app.db.models.simulation_models import Simulation, SimulationResult, OpenAnswer


class ResultRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _scoped_results(self, grader_scope: Optional[str]):
        query = self.db.query(SimulationResult)
        if grader_scope is not None:
            query = query.join(Simulation, SimulationResult.simulation_id == Simulation.id).filter(
                Simulation.creator_id == grader_scope
            )
        return query

    # --- Result Methods ---

    def add_result(self, record: Dict, open_answer_records: List[Dict]) -> SimulationResult:
        """
        Stages a new result with its open answers in the session. The caller
        recalculates the aggregates and then commits.
        """
        new_result = SimulationResult(**record)
        new_result.open_answers = [OpenAnswer(**oa) for oa in open_answer_records]
        self.db.add(new_result)
        return new_result

    def get_result(self, result_id: str, grader_scope: Optional[str] = None) -> Optional[SimulationResult]:
        return (
            self._scoped_results(grader_scope)
            .options(
                selectinload(SimulationResult.open_answers).joinedload(OpenAnswer.question),
                joinedload(SimulationResult.student),
                joinedload(SimulationResult.simulation),
            )
            .filter(SimulationResult.id == result_id)
            .first()
        )

    def count_results_with_pending_reviews(self, grader_scope: Optional[str] = None) -> int:
        return (
            self._scoped_results(grader_scope)
            .filter(SimulationResult.pending_open_answers > 0)
            .count()
        )

    def get_results_with_pending_reviews(self, limit: int, offset: int, grader_scope: Optional[str] = None) -> List[SimulationResult]:
        """Oldest completed attempts first, so the backlog is worked in submission order."""
        return (
            self._scoped_results(grader_scope)
            .options(joinedload(SimulationResult.student), joinedload(SimulationResult.simulation))
            .filter(SimulationResult.pending_open_answers > 0)
            .order_by(SimulationResult.completed_at.asc(), SimulationResult.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    # --- Open Answer Methods ---

    def get_open_answer(self, open_answer_id: str) -> Optional[OpenAnswer]:
        return self.db.query(OpenAnswer).filter(OpenAnswer.id == open_answer_id).first()

    def get_existing_open_answer_ids(self, open_answer_ids: List[str]) -> List[str]:
        if not open_answer_ids:
            return []
        rows = self.db.query(OpenAnswer.id).filter(OpenAnswer.id.in_(set(open_answer_ids))).all()
        return [row[0] for row in rows]

    # --- Transaction Control ---

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
