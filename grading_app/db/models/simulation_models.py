# /grading_app/db/models/simulation_models.py

"""
This module defines the SQLAlchemy ORM models for simulations (with their
scoring configuration), questions, and the results of a student's attempt
together with the open answers that wait for manual grading.
"""

from sqlalchemy import Column, String, Float, Integer, Boolean, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Simulation(Base):
    """
    A timed exam, practice quiz or paper test. Only the scoring
    configuration is relevant to grading: points for a correct, wrong and
    blank answer.
    """
    __tablename__ = "simulations"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    creator_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)

    correct_points = Column(Float, nullable=False, default=1.0)
    wrong_points = Column(Float, nullable=False, default=0.0)
    blank_points = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    creator = relationship("User")
    results = relationship("SimulationResult", back_populates="simulation", cascade="all, delete-orphan")


class Question(Base):
    """
    A question from the question bank. Open-text questions may carry a list of
    keyword rules ({keyword, weight, isRequired}) used by the auto-scorer.
    """
    id = Column(String, primary_key=True, index=True)
    text = Column(String, nullable=False)
    text_latex = Column(String, nullable=True)
    correct_explanation = Column(String, nullable=True)
    keywords = Column(JSON, nullable=True)


class SimulationResult(Base):
    """
    One student's attempt at one simulation.

    `base_score` holds the points settled at submission time (closed
    questions and blank open answers); `total_score`, `percentage_score` and
    `pending_open_answers` are recalculated every time an open answer under
    this result is validated.
    """
    __tablename__ = "simulation_results"

    id = Column(String, primary_key=True, index=True)
    simulation_id = Column(String, ForeignKey("simulations.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    base_score = Column(Float, nullable=False, default=0.0)
    max_score = Column(Float, nullable=False, default=0.0)
    total_score = Column(Float, nullable=False, default=0.0)
    percentage_score = Column(Float, nullable=False, default=0.0)
    pending_open_answers = Column(Integer, nullable=False, default=0, index=True)

    simulation = relationship("Simulation", back_populates="results")
    student = relationship("User")
    open_answers = relationship(
        "OpenAnswer",
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="OpenAnswer.position",
    )


class OpenAnswer(Base):
    """
    A free-text answer inside a result. It is created pending (with the
    keyword auto-score) and validated exactly once by a staff member.
    """
    __tablename__ = "open_answers"

    id = Column(String, primary_key=True, index=True)
    result_id = Column(String, ForeignKey("simulation_results.id"), nullable=False, index=True)
    question_id = Column(String, ForeignKey("questions.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    answer_text = Column(String, nullable=False)

    # Keyword matcher output, kept for audit once the answer is validated.
    auto_score = Column(Float, nullable=True)
    keywords_matched = Column(JSON, nullable=False, default=list)
    keywords_missed = Column(JSON, nullable=False, default=list)

    is_validated = Column(Boolean, nullable=False, default=False, index=True)
    final_score = Column(Float, nullable=True)
    validator_notes = Column(String, nullable=True)
    validated_at = Column(DateTime(timezone=True), nullable=True)
    validator_id = Column(String, ForeignKey("users.id"), nullable=True)

    result = relationship("SimulationResult", back_populates="open_answers")
    question = relationship("Question")
    validator = relationship("User")
