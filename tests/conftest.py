# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from grading_app.db.base import Base, User, Simulation, Question, SimulationResult, OpenAnswer
from grading_app.db.database import get_db
from grading_app.main import app
from grading_app.services.database_service import DatabaseService
from grading_app.services.grading_service import GradingService
from grading_app.services.grading_helpers import score_recalculation

# --- Database Fixtures ---

@pytest.fixture
def db_session():
    """A fresh in-memory SQLite database per test, shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def seeded(db_session):
    """Users, two simulations owned by different collaborators, and three questions."""
    users = {
        "admin": User(id="usr_admin", name="Anna Admin", email="admin@example.com", role="ADMIN"),
        "collab": User(id="usr_collab", name="Carlo Collab", email="carlo@example.com", role="COLLABORATOR"),
        "collab2": User(id="usr_collab2", name="Chiara Collab", email="chiara@example.com", role="COLLABORATOR"),
        "student": User(id="usr_student", name="Sara Studente", email="sara@example.com", role="STUDENT"),
        "student2": User(id="usr_student2", name="Luca Studente", email="luca@example.com", role="STUDENT"),
    }
    simulations = {
        "sim": Simulation(id="sim_1", title="Simulazione Medicina", creator_id="usr_collab",
                          correct_points=1.5, wrong_points=-0.4, blank_points=0.0),
        "sim2": Simulation(id="sim_2", title="Quiz Chimica", creator_id="usr_collab2",
                           correct_points=1.0, wrong_points=0.0, blank_points=0.0),
    }
    questions = {
        "q1": Question(id="q_1", text="Descrivi la fotosintesi", correct_explanation="Processo clorofilliano",
                       keywords=[
                           {"keyword": "fotosintesi", "weight": 0.5, "isRequired": True},
                           {"keyword": "clorofilla", "weight": 0.3, "isRequired": False},
                           {"keyword": "ossigeno", "weight": 0.2, "isRequired": False},
                       ]),
        "q2": Question(id="q_2", text="Che cos'è un mitocondrio?"),
        "q3": Question(id="q_3", text="Spiega la legge di Ohm",
                       keywords=[{"keyword": "resistenza", "weight": 1, "isRequired": True}]),
    }
    db_session.add_all([*users.values(), *simulations.values(), *questions.values()])
    db_session.commit()
    return {"users": users, "simulations": simulations, "questions": questions}


@pytest.fixture
def make_result(db_session, seeded):
    """
    Factory for a result with pending open answers carrying the given auto
    scores, recalculated the same way the service does it.
    """
    counter = {"n": 0}

    def _make(auto_scores, simulation_id="sim_1", student_id="usr_student", base_score=0.0, max_score=4.5):
        counter["n"] += 1
        n = counter["n"]
        result = SimulationResult(
            id=f"res_{n}", simulation_id=simulation_id, student_id=student_id,
            base_score=base_score, max_score=max_score,
        )
        result.open_answers = [
            OpenAnswer(
                id=f"oa_{n}_{i}", question_id=f"q_{(i % 3) + 1}", position=i,
                answer_text=f"Risposta {i}", auto_score=score,
                keywords_matched=[], keywords_missed=[], is_validated=False,
            )
            for i, score in enumerate(auto_scores)
        ]
        db_session.add(result)
        simulation = db_session.get(Simulation, simulation_id)
        score_recalculation.recalculate_result(result, simulation.correct_points)
        db_session.commit()
        return result

    return _make


# --- Service & API Fixtures ---

@pytest.fixture
def grading_service(db_session):
    return GradingService(db=DatabaseService(db_session=db_session))


@pytest.fixture
def client(db_session):
    """TestClient whose requests share the test's database session."""
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()