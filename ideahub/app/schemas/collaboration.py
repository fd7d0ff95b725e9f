"""Collaboration request schemas."""

from datetime import datetime
from pydantic import BaseModel, Field

from ideahub.app.models.collaboration import RequestStatus
from ideahub.app.schemas.idea import Collaborator


class CollaborationRequestCreate(BaseModel):
    """Schema for submitting a collaboration request."""

    idea_id: str = Field(..., min_length=1, description="Target idea ID")
    message: str | None = Field(None, max_length=1000, description="Optional note to the author")


class CollaborationRequestResponse(BaseModel):
    """Schema for collaboration request data in responses."""

    id: str = Field(..., description="Request ID")
    idea_id: str = Field(..., description="Target idea ID")
    requester_id: str = Field(..., description="Requester's user ID")
    requester_name: str = Field(..., description="Requester's display name")
    requester_email: str = Field(..., description="Requester's email")
    requester_github: str | None = Field(None, description="Requester's GitHub link")
    requester_linkedin: str | None = Field(None, description="Requester's LinkedIn link")
    message: str | None = Field(None, description="Note to the author")
    status: RequestStatus = Field(..., description="pending, accepted or rejected")
    created_at: datetime = Field(..., description="Submission timestamp")
    decided_at: datetime | None = Field(None, description="Decision timestamp")

    model_config = {"from_attributes": True}


class CollaborationRequestListResponse(BaseModel):
    """Schema for collaboration request list."""

    requests: list[CollaborationRequestResponse] = Field(..., description="Requests, newest first")
    total: int = Field(..., description="Total number of requests")


class CollaborationAcceptResponse(BaseModel):
    """Accepted request plus the idea's collaborator list after the append."""

    request: CollaborationRequestResponse = Field(..., description="The accepted request")
    collaborators: list[Collaborator] = Field(..., description="Idea collaborators")
