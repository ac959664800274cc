"""
Custom Exception Hierarchy
Domain and application-level exceptions

Every exception carries a message that is safe to show to the user.
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Identity provider rejected the request or could not be reached"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidStatusTransitionException(ValidationException):
    """Application status move not allowed by the active workflow"""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__("status", f"cannot move from '{current}' to '{requested}'")


class RepositoryException(DomainException):
    """Database operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(DomainException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value: str):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")


class DuplicateApplicationException(DuplicateResourceException):
    """Student already applied to this internship"""

    def __init__(self, internship_id: str):
        super().__init__("Application", "internship_id", internship_id)
        self.internship_id = internship_id

    def __str__(self) -> str:
        return "You have already applied for this internship"
