# /grading_app/services/database_service.py

from typing import List, Dict, Optional, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from grading_app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.catalog_repository_sql import CatalogRepositorySQL
from .database_helpers.result_repository_sql import ResultRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """Facade over the SQL repositories, bound to one request's session."""
        if db_session is None:
            raise ValueError("A database session is required.")
        self.catalog_repo = CatalogRepositorySQL(db_session)
        self.result_repo = ResultRepositorySQL(db_session)

    # --- CATALOG METHODS (DELEGATED) ---
    def get_user(self, user_id: str): return self.catalog_repo.get_user(user_id)
    def get_simulation(self, simulation_id: str): return self.catalog_repo.get_simulation(simulation_id)
    def get_questions_by_ids(self, question_ids: List[str]) -> Dict: return self.catalog_repo.get_questions_by_ids(question_ids)

    # --- RESULT & OPEN ANSWER METHODS (DELEGATED) ---
    def add_result(self, record: Dict, open_answer_records: List[Dict]): return self.result_repo.add_result(record, open_answer_records)
    def get_result(self, result_id: str, grader_scope: Optional[str] = None): return self.result_repo.get_result(result_id, grader_scope)
    def get_open_answer(self, open_answer_id: str): return self.result_repo.get_open_answer(open_answer_id)
    def get_existing_open_answer_ids(self, open_answer_ids: List[str]) -> List[str]: return self.result_repo.get_existing_open_answer_ids(open_answer_ids)
    def count_results_with_pending_reviews(self, grader_scope: Optional[str] = None) -> int: return self.result_repo.count_results_with_pending_reviews(grader_scope)
    def get_results_with_pending_reviews(self, limit: int, offset: int, grader_scope: Optional[str] = None) -> List:
        return self.result_repo.get_results_with_pending_reviews(limit, offset, grader_scope)

    # --- TRANSACTION CONTROL ---
    def commit(self): self.result_repo.commit()
    def rollback(self): self.result_repo.rollback()


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request session."""
    yield DatabaseService(db_session=db)
