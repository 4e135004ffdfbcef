# /grading_app/db/models/user_models.py

"""
SQLAlchemy model for the platform's principals: admins, collaborators
and students. Authentication itself lives outside this service; the
table only carries what grading needs (identity and role).
"""

from sqlalchemy import Column, String

from ..base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # One of the `UserRole` values: ADMIN, COLLABORATOR, STUDENT.
    role = Column(String, nullable=False, default="STUDENT")
