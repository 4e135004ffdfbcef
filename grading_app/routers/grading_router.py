# /grading_app/routers/grading_router.py

"""
API endpoints of the open-answer grading workflow.

Routers stay thin: they resolve the principal, delegate to the
GradingService and translate domain errors into HTTP responses. Mutations
are never retried here; after any mutation the client re-fetches the
result and the pending count instead of trusting its local copies.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status

# --- Application-specific Imports ---
from ..services.grading_service import GradingService, get_grading_service
from ..models import grading_model
from ..core.deps import get_current_active_user, get_current_staff_user
from ..core.exceptions import NotFoundError, InvalidStateError, PermissionDeniedError
from ..db.models.user_models import User as UserModel

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_error(e: Exception, action: str) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, InvalidStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.exception("Unexpected error while %s", action)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected error occurred while {action}.")


# --- Read Endpoints ---

@router.get(
    "/results/pending",
    response_model=grading_model.PendingReviewListResponse,
    summary="List Results With Open Answers Awaiting Review"
)
def get_results_with_pending_reviews(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_staff_user)
):
    """Paginated backlog of results with at least one pending open answer."""
    try:
        return grading_svc.get_results_with_pending_reviews(limit=limit, offset=offset, grader=current_user)
    except Exception as e:
        raise _to_http_error(e, "listing pending reviews")


@router.get(
    "/results/pending/count",
    response_model=grading_model.PendingReviewCountResponse,
    summary="Count Results Awaiting Review (Badge)"
)
def get_pending_review_count(
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_staff_user)
):
    """Cheap count for the navigation badge, polled while the page is visible."""
    try:
        return grading_svc.get_pending_review_count(grader=current_user)
    except Exception as e:
        raise _to_http_error(e, "counting pending reviews")


@router.get(
    "/results/{result_id}/open-answers",
    response_model=grading_model.ResultReviewResponse,
    summary="Get a Result With Its Open Answers"
)
def get_open_answers_for_result(
    result_id: str,
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    """Pending answers first, then validated ones."""
    try:
        return grading_svc.get_open_answers_for_result(result_id=result_id, user=current_user)
    except Exception as e:
        raise _to_http_error(e, "loading the result")


# --- Mutation Endpoints ---

@router.post(
    "/results",
    response_model=grading_model.ResultReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a Finished Attempt"
)
def record_result(
    request: grading_model.ResultCreateRequest,
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_staff_user)
):
    """Stores a student's finished attempt and auto-scores its open answers by keyword matching."""
    try:
        return grading_svc.record_result(request=request, user=current_user)
    except Exception as e:
        raise _to_http_error(e, "recording the result")


@router.post(
    "/open-answers/validate",
    response_model=grading_model.SingleValidationResponse,
    summary="Validate a Single Open Answer"
)
def validate_open_answer(
    validation: grading_model.OpenAnswerValidation,
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_staff_user)
):
    """One-way transition of a pending answer to validated."""
    try:
        return grading_svc.validate_open_answer(validation=validation, grader=current_user)
    except Exception as e:
        raise _to_http_error(e, "validating the open answer")


@router.post(
    "/open-answers/validate-batch",
    response_model=grading_model.BatchValidationResponse,
    summary="Validate Open Answers of a Result Atomically"
)
def validate_open_answers_batch(
    request: grading_model.BatchValidationRequest,
    grading_svc: GradingService = Depends(get_grading_service),
    current_user: UserModel = Depends(get_current_staff_user)
):
    """All entries persist together or none does. `remainingPending == 0` means grading is complete."""
    try:
        return grading_svc.validate_open_answers_batch(request=request, grader=current_user)
    except Exception as e:
        raise _to_http_error(e, "validating the batch")
