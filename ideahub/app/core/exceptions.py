"""Custom exception classes for IdeaHub application."""


class IdeaHubException(Exception):
    """Base exception for all IdeaHub-specific errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(IdeaHubException):
    """Raised when input fields are missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            details=f"Invalid field: {field}" if field else None
        )
        self.field = field


class AuthError(IdeaHubException):
    """Raised when the caller is unauthenticated, unverified, or not allowed to act."""

    def __init__(self, message: str, authenticated: bool = True):
        super().__init__(
            message=message,
            details="You do not have access to this resource" if authenticated
            else "A valid identity token is required"
        )
        self.authenticated = authenticated


class NotFoundError(IdeaHubException):
    """Raised when a referenced record does not exist."""


class IdeaNotFoundError(NotFoundError):
    """Raised when an idea is not found."""

    def __init__(self, idea_id: str):
        super().__init__(
            message=f"Idea not found: {idea_id}",
            details="The requested idea does not exist"
        )
        self.idea_id = idea_id


class CommentNotFoundError(NotFoundError):
    """Raised when a comment is not found under an idea."""

    def __init__(self, comment_id: str, idea_id: str):
        super().__init__(
            message=f"Comment {comment_id} not found on idea {idea_id}",
            details="The requested comment does not exist"
        )
        self.comment_id = comment_id
        self.idea_id = idea_id


class CollaborationRequestNotFoundError(NotFoundError):
    """Raised when a collaboration request is not found."""

    def __init__(self, request_id: str):
        super().__init__(
            message=f"Collaboration request not found: {request_id}",
            details="The requested collaboration request does not exist"
        )
        self.request_id = request_id


class ProfileNotFoundError(NotFoundError):
    """Raised when a user profile is not found."""

    def __init__(self, uid: str):
        super().__init__(
            message=f"Profile not found: {uid}",
            details="The requested user profile does not exist"
        )
        self.uid = uid


class StoreError(IdeaHubException):
    """Raised when the underlying store call fails."""

    def __init__(self, operation: str, original_error: Exception | None = None):
        message = f"Store error during {operation}"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="The data store is temporarily unavailable"
        )
        self.operation = operation
        self.original_error = original_error


class GitHubServiceError(IdeaHubException):
    """Raised when the GitHub API encounters an error."""

    def __init__(self, operation: str, original_error: Exception | str | None = None):
        message = f"GitHub service error during {operation}"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="GitHub could not complete the request"
        )
        self.operation = operation
        self.original_error = original_error
