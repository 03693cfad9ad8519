"""
Domain error kinds shared by the scheduling and review services.

Every error raised by a service layer carries a stable ``kind`` and a
human-readable message. The kinds are transport-agnostic; the HTTP mapping
lives in ``config.views.api_exception_handler``.

Exception Hierarchy:
    DomainError (base)
    ├── NotFoundError            kind='not_found'
    ├── BadRequestError          kind='bad_request'
    ├── SchedulingConflictError  kind='scheduling_conflict'
    ├── InvalidTransitionError   kind='invalid_transition'
    ├── ForbiddenError           kind='forbidden'
    └── ExpiredError             kind='expired'

App-specific errors subclass one of the kinds, for example::

    class InvalidRatingError(BadRequestError):
        default_message = "Rating must be an integer between 1 and 5"
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    kind = 'error'
    default_message = 'Domain error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Entity id does not resolve."""

    kind = 'not_found'
    default_message = 'Not found'


class BadRequestError(DomainError):
    """Malformed or out-of-range input."""

    kind = 'bad_request'
    default_message = 'Bad request'


class SchedulingConflictError(DomainError):
    """Slot already occupied, detected at pre-check or at commit time."""

    kind = 'scheduling_conflict'
    default_message = 'The requested slot is already taken'


class InvalidTransitionError(DomainError):
    """Status change not allowed from the current state."""

    kind = 'invalid_transition'
    default_message = 'Invalid status transition'


class ForbiddenError(DomainError):
    """Actor lacks authority for the requested operation."""

    kind = 'forbidden'
    default_message = 'You do not have permission to perform this action'


class ExpiredError(DomainError):
    """Operation attempted after its time window closed."""

    kind = 'expired'
    default_message = 'The time window for this action has expired'
