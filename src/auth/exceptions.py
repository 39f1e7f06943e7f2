"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status

NOT_AUTHORIZED = "Not Authorized."

class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationFailedException(AuthException):
    """Exception raised when submitted account fields are missing or malformed."""
    def __init__(self, detail: str = "All fields must be filled."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists in the same identity table."""
    def __init__(self, detail: str = "Email already in use."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidCredentialsException(AuthException):
    """Exception raised when login credentials are invalid."""
    def __init__(self, detail: str = "Incorrect email."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class NotAuthorizedException(AuthException):
    """
    Exception raised when a guard rejects a request.

    The response never says why; the reason is kept for server-side logs.
    """
    def __init__(self, reason: str = "rejected"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
        )
        self.reason = reason

class InvalidTokenException(NotAuthorizedException):
    """Exception raised when a token fails verification (malformed, bad signature, expired)."""
    def __init__(self, reason: str = "Invalid token"):
        super().__init__(reason=reason)

class SocialLoginException(AuthException):
    """Exception raised when a Google sign-in attempt cannot be completed."""
    def __init__(self, detail: str = "Social login failed."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
