"""Custom exception classes for the Registrar Portal.

This module defines application-specific exceptions following Google Python
Style Guide. Each exception carries the HTTP status code it is reported with;
the application-level exception handlers turn them into ``{"error": ...}``
JSON responses.
"""


class PortalError(Exception):
    """Base exception for all Registrar Portal errors."""

    status_code: int = 500

    def __init__(self, message: str = "Internal server error"):
        """Initialize the exception.

        Args:
            message: Human-readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class ValidationError(PortalError):
    """Raised when request data is missing or invalid."""

    status_code = 400


class UnauthorizedError(PortalError):
    """Raised when the caller is not authenticated or lacks the required role."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(PortalError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class LimitExceededError(PortalError):
    """Raised when a student already has the maximum number of active requests."""

    status_code = 400


class ConversationLockedError(PortalError):
    """Raised when writing to the conversation of a completed request."""

    status_code = 400

    def __init__(self, conversation_id: str):
        """Initialize the exception.

        Args:
            conversation_id: The ID of the closed conversation.
        """
        self.conversation_id = conversation_id
        super().__init__("Conversation is closed")


class InternalError(PortalError):
    """Raised when an unexpected failure (e.g. a database error) occurs."""

    status_code = 500


class RequestNotFoundError(NotFoundError):
    """Raised when a document request cannot be found."""

    def __init__(self, request_id: str):
        """Initialize the exception.

        Args:
            request_id: The ID of the request that was not found.
        """
        self.request_id = request_id
        super().__init__("Request not found")


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation is unknown or not visible to the caller."""

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__("Conversation not found")


class TicketNotFoundError(NotFoundError):
    """Raised when a support ticket cannot be found."""

    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__("Ticket not found")


class AnnouncementNotFoundError(NotFoundError):
    """Raised when an announcement cannot be found."""

    def __init__(self, announcement_id: str):
        self.announcement_id = announcement_id
        super().__init__("Announcement not found")


class UserAlreadyExistsError(ValidationError):
    """Raised when signing up with an email or student ID already in use."""

    pass
