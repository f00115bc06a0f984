"""
Service Errors

Exception taxonomy raised by the service layer. Each error carries the
HTTP status the API layer answers with.
"""


class RecipeAppError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 500
    default_message = 'Request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecipeAppError):
    """Missing or malformed input; nothing was written."""
    status_code = 400
    default_message = 'Invalid input'


class AuthenticationError(RecipeAppError):
    """No identity, or credentials/token that do not check out."""
    status_code = 401
    default_message = 'Authentication required'


class AuthorizationError(RecipeAppError):
    """Identity is known but not allowed to touch the resource."""
    status_code = 403
    default_message = 'Not authorized'


class NotFoundError(RecipeAppError):
    status_code = 404
    default_message = 'Not found'


class ConflictError(RecipeAppError):
    """Unique constraint violation (user, ingredient or tag name)."""
    status_code = 409
    default_message = 'Already exists'


class UnexpectedStorageError(RecipeAppError):
    """Database failure mid-transaction; the transaction was rolled back."""
    status_code = 500
    default_message = 'Storage failure'
