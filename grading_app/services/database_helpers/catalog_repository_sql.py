# /grading_app/services/database_helpers/catalog_repository_sql.py

"""
Read access to the entities grading only references: users, simulations
and questions. Their CRUD lives in other services.
"""

from typing import List, Dict, Optional
from sqlalchemy.orm import Session

from grading_app.db.models.user_models import User
from grading_app.db.models.simulation_models import Simulation, Question


class CatalogRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_simulation(self, simulation_id: str) -> Optional[Simulation]:
        return self.db.query(Simulation).filter(Simulation.id == simulation_id).first()

    def get_questions_by_ids(self, question_ids: List[str]) -> Dict[str, Question]:
        """Returns a map of the requested questions that exist, keyed by id."""
        if not question_ids:
            return {}
        rows = self.db.query(Question).filter(Question.id.in_(set(question_ids))).all()
        return {q.id: q for q in rows}
