"""
Collaboration Workflow: request, accept or reject joining an idea.

State machine per request::

    pending -> accepted
    pending -> rejected

Both end states are terminal. Accepting writes the request status and appends
the requester to the idea's collaborators. The append is skipped when a
collaborator with the same user_id is already listed, so accepting an
already-accepted request again is safe and repairs a missing collaborator entry.
"""

import logging
from datetime import datetime

from sqlalchemy import select

from ideahub.app.core.config import settings
from ideahub.app.core.exceptions import (
    AuthError,
    CollaborationRequestNotFoundError,
    ValidationError,
)
from ideahub.app.core.security import Caller
from ideahub.app.models.collaboration import CollaborationRequest, RequestStatus
from ideahub.app.models.idea import Idea
from ideahub.app.schemas.collaboration import CollaborationRequestCreate
from ideahub.app.services.base import StoreService
from ideahub.app.services.ideas import IdeaStore
from ideahub.app.services.profiles import ProfileDirectory

logger = logging.getLogger(__name__)


def collaborator_entry(request: CollaborationRequest) -> dict:
    """Collaborator record derived from the requester fields."""
    return {
        "user_id": request.requester_id,
        "name": request.requester_name,
        "email": request.requester_email,
        "github": request.requester_github,
        "linkedin": request.requester_linkedin,
    }


class CollaborationWorkflow(StoreService):
    """Owns collaboration requests and the collaborator list they feed."""

    @property
    def ideas(self) -> IdeaStore:
        return IdeaStore(self.db)

    @property
    def profiles(self) -> ProfileDirectory:
        return ProfileDirectory(self.db)

    async def get(self, request_id: str) -> CollaborationRequest:
        """Get a request or raise CollaborationRequestNotFoundError."""
        result = await self._execute(
            select(CollaborationRequest).where(CollaborationRequest.id == request_id),
            "get collaboration request",
        )
        request = result.scalar_one_or_none()
        if not request:
            raise CollaborationRequestNotFoundError(request_id)
        return request

    async def submit(
        self,
        caller: Caller,
        request_data: CollaborationRequestCreate,
    ) -> CollaborationRequest:
        """
        Submit a pending request to join an idea.

        Requester name, email and links come from the caller's profile, with
        the identity token as fallback. Repeat requests for the same idea are
        accepted as separate records.

        Raises:
            IdeaNotFoundError: If the idea does not exist
            ValidationError: If the caller is the author, has no email, or
                has no GitHub/LinkedIn link while one is required
        """
        idea = await self.ideas.get(request_data.idea_id)
        if idea.author_id == caller.uid:
            raise ValidationError(
                "You cannot request collaboration on your own idea",
                field="idea_id",
            )

        profile = await self.profiles.find(caller.uid)
        email = profile.email if profile else caller.email
        if not email:
            raise ValidationError("Requester email is required", field="requester_email")
        name = (profile.display_name if profile else None) or caller.name or email
        github = profile.github if profile else None
        linkedin = profile.linkedin if profile else None

        if settings.require_social_link_for_collaboration and not (github or linkedin):
            raise ValidationError(
                "Link your GitHub or LinkedIn in your profile to request collaboration",
                field="requester_github",
            )

        request = CollaborationRequest(
            idea_id=idea.id,
            requester_id=caller.uid,
            requester_name=name,
            requester_email=email,
            requester_github=github,
            requester_linkedin=linkedin,
            message=request_data.message,
            status=RequestStatus.PENDING.value,
            created_at=datetime.utcnow(),
        )
        self.db.add(request)
        await self._commit("submit collaboration request")

        logger.info(f"[COLLAB-SUBMIT] Request {request.id} from {caller.uid} for idea {idea.id}")
        return request

    async def list_for_owner(self, user_id: str) -> list[CollaborationRequest]:
        """
        Requests targeting any idea authored by user_id, newest first.

        An owner with no ideas gets an empty list.
        """
        ideas_result = await self._execute(
            select(Idea.id).where(Idea.author_id == user_id),
            "list owner ideas",
        )
        idea_ids = list(ideas_result.scalars().all())
        if not idea_ids:
            return []

        result = await self._execute(
            select(CollaborationRequest)
            .where(CollaborationRequest.idea_id.in_(idea_ids))
            .order_by(CollaborationRequest.created_at.desc()),
            "list collaboration requests",
        )
        return list(result.scalars().all())

    async def list_for_requester(self, user_id: str) -> list[CollaborationRequest]:
        """Requests sent by user_id, newest first."""
        result = await self._execute(
            select(CollaborationRequest)
            .where(CollaborationRequest.requester_id == user_id)
            .order_by(CollaborationRequest.created_at.desc()),
            "list sent collaboration requests",
        )
        return list(result.scalars().all())

    async def _load_for_decision(
        self,
        caller: Caller,
        request_id: str,
        for_update: bool = False,
    ) -> tuple[CollaborationRequest, Idea]:
        request = await self.get(request_id)
        idea = await self.ideas.get(request.idea_id, for_update=for_update)
        if idea.author_id != caller.uid:
            raise AuthError("Only the idea's author can decide on collaboration requests")
        return request, idea

    async def accept(self, caller: Caller, request_id: str) -> tuple[CollaborationRequest, Idea]:
        """
        Accept a request and add the requester to the idea's collaborators.

        Retryable: on an already-accepted request only the dedup-checked
        append runs again.

        Raises:
            CollaborationRequestNotFoundError: If the request does not exist
            IdeaNotFoundError: If the request's idea no longer exists
            AuthError: If the caller is not the idea's author
            ValidationError: If the request was already rejected
        """
        # Idea row stays locked until the commit below
        request, idea = await self._load_for_decision(caller, request_id, for_update=True)

        if request.status == RequestStatus.REJECTED.value:
            raise ValidationError(
                "Collaboration request was already rejected",
                field="status",
            )
        if request.status != RequestStatus.ACCEPTED.value:
            request.status = RequestStatus.ACCEPTED.value
            request.decided_at = datetime.utcnow()

        collaborators = list(idea.collaborators or [])
        if not any(c.get("user_id") == request.requester_id for c in collaborators):
            idea.collaborators = [*collaborators, collaborator_entry(request)]
            logger.info(f"[COLLAB-ACCEPT] Added {request.requester_id} to idea {idea.id}")
        else:
            logger.info(f"[COLLAB-ACCEPT] {request.requester_id} already collaborates on {idea.id}")

        await self._commit("accept collaboration request")
        return request, idea

    async def reject(self, caller: Caller, request_id: str) -> CollaborationRequest:
        """
        Reject a pending request. Never touches the idea.

        Rejecting an already-rejected request is a no-op.

        Raises:
            ValidationError: If the request was already accepted
        """
        request, _ = await self._load_for_decision(caller, request_id)

        if request.status == RequestStatus.REJECTED.value:
            return request
        if request.status == RequestStatus.ACCEPTED.value:
            raise ValidationError(
                "Collaboration request was already accepted",
                field="status",
            )

        request.status = RequestStatus.REJECTED.value
        request.decided_at = datetime.utcnow()
        await self._commit("reject collaboration request")

        logger.info(f"[COLLAB-REJECT] Request {request_id} rejected")
        return request
