# mentor_network/exceptions.py
class BusinessLogicError(Exception):
    """Base exception for business logic errors"""
    pass

class UnauthorizedError(BusinessLogicError):
    """Raised when no authenticated actor is present"""
    pass

class ForbiddenError(BusinessLogicError):
    """Raised when the actor has the wrong role for an operation"""
    pass

class NotFoundError(BusinessLogicError):
    """Raised when a referenced user or follow request is absent"""
    pass

class InvalidOperationError(BusinessLogicError):
    """Raised for self-follow, a non-mentor target, or a malformed action"""
    pass

class InvalidStatusTransitionError(InvalidOperationError):
    """Raised when a follow request is not in a state that allows the transition"""
    pass

class ConstraintViolationError(BusinessLogicError):
    """Raised when the store rejects a write on a uniqueness constraint"""
    pass

class StoreUnavailableError(BusinessLogicError):
    """Raised when the entity store cannot be reached"""
    pass
