"""
Domain exceptions.

Each exception carries the HTTP status code the API answers with, so the
handlers registered in main.py can translate them without a lookup table.
"""


class ShortlinkError(Exception):
    """Base class for all application errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(ShortlinkError):
    """The key-value store failed to execute a command"""

    status_code = 503


class InvalidLinkError(ShortlinkError):
    status_code = 422


class LinkExistsError(ShortlinkError):
    status_code = 409


class LinkNotFoundError(ShortlinkError):
    status_code = 404


class SlugGenerationError(ShortlinkError):
    status_code = 500


class UserExistsError(ShortlinkError):
    status_code = 403


class NoUserError(ShortlinkError):
    status_code = 404


class InvalidPasswordError(ShortlinkError):
    status_code = 400


class AuthenticationError(ShortlinkError):
    status_code = 403
