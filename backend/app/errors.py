"""Domain errors raised by the relationship services."""


class RelationshipServiceError(Exception):
    """Base error; carries the HTTP status the API layer renders it with."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RelationshipServiceError, LookupError):
    """The requested relationship type or relationship does not exist."""
    status_code = 404


class ConflictError(RelationshipServiceError):
    """A uniqueness or referential constraint would be violated."""
    status_code = 409


class InvalidArgumentError(RelationshipServiceError, ValueError):
    """Malformed enum value, self-relationship or bad date range."""
    status_code = 400
