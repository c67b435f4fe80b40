"""
Domain exceptions raised by the user service and entity
"""


class DuplicateEmailError(Exception):
    """Raised when an email address is already owned by another user"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email '{email}' already exists")


class UserValidationError(ValueError):
    """Raised when user data fails validation"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
