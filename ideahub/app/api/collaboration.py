"""Collaboration request API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideahub.app.core.security import Caller, get_current_caller
from ideahub.app.db.base import get_db
from ideahub.app.models.collaboration import CollaborationRequest
from ideahub.app.schemas.collaboration import (
    CollaborationAcceptResponse,
    CollaborationRequestCreate,
    CollaborationRequestListResponse,
    CollaborationRequestResponse,
)
from ideahub.app.schemas.idea import Collaborator
from ideahub.app.services.collaboration import CollaborationWorkflow

router = APIRouter(prefix="/collaboration-requests", tags=["collaboration"])


def _to_list_response(requests: list[CollaborationRequest]) -> CollaborationRequestListResponse:
    responses = [CollaborationRequestResponse.model_validate(req) for req in requests]
    return CollaborationRequestListResponse(requests=responses, total=len(responses))


@router.post(
    "/",
    response_model=CollaborationRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_request(
    request_data: CollaborationRequestCreate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CollaborationRequestResponse:
    """Ask to collaborate on someone else's idea."""
    request = await CollaborationWorkflow(db).submit(caller, request_data)
    return CollaborationRequestResponse.model_validate(request)


@router.get("/received", response_model=CollaborationRequestListResponse)
async def list_received_requests(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CollaborationRequestListResponse:
    """Requests targeting the caller's ideas."""
    requests = await CollaborationWorkflow(db).list_for_owner(caller.uid)
    return _to_list_response(requests)


@router.get("/sent", response_model=CollaborationRequestListResponse)
async def list_sent_requests(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CollaborationRequestListResponse:
    """Requests the caller has sent."""
    requests = await CollaborationWorkflow(db).list_for_requester(caller.uid)
    return _to_list_response(requests)


@router.post("/{request_id}/accept", response_model=CollaborationAcceptResponse)
async def accept_request(
    request_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CollaborationAcceptResponse:
    """
    Accept a request and add the requester to the idea's collaborators.

    Safe to retry; the requester is never listed twice.
    """
    request, idea = await CollaborationWorkflow(db).accept(caller, request_id)
    return CollaborationAcceptResponse(
        request=CollaborationRequestResponse.model_validate(request),
        collaborators=[Collaborator.model_validate(c) for c in idea.collaborators],
    )


@router.post("/{request_id}/reject", response_model=CollaborationRequestResponse)
async def reject_request(
    request_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CollaborationRequestResponse:
    """Reject a pending request."""
    request = await CollaborationWorkflow(db).reject(caller, request_id)
    return CollaborationRequestResponse.model_validate(request)
