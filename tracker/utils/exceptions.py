"""
Custom exceptions for the stat tracker with user-friendly error messages.
"""

class TrackerException(Exception):
    """Base exception for stat tracker errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class InvalidPublicIdError(TrackerException):
    """Raised when a public id fails validation. The message never varies."""
    MESSAGE = "Invalid public id"

    def __init__(self):
        super().__init__(
            self.MESSAGE,
            "❌ Player ids are 1-12 letters or digits with no spaces or symbols."
        )

class StoreError(TrackerException):
    """Raised when a store query fails."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Store error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
