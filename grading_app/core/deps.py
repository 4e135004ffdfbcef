# /grading_app/core/deps.py

"""
Principal resolution. Authentication happens upstream: the gateway
forwards the authenticated user's id in the `X-User-Id` header and this
module only loads the matching user and checks the role.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ..db.models.user_models import User
from ..services.database_service import DatabaseService, get_db_service
from ..models.grading_model import STAFF_ROLES


def get_current_active_user(
    x_user_id: Optional[str] = Header(None),
    db: DatabaseService = Depends(get_db_service),
) -> User:
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated.")
    user = db.get_user(x_user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user.")
    return user


def get_current_staff_user(current_user: User = Depends(get_current_active_user)) -> User:
    """Only admins and collaborators may grade."""
    if current_user.role not in STAFF_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Grading requires a staff role.")
    return current_user
