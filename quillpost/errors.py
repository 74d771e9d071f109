"""Exceptions raised by the account, session and post services."""

from werkzeug.exceptions import Forbidden, NotFound

GENERIC_LOGIN_FAILURE = "Invalid email or password."
SAVE_FAILED = "Something went wrong saving your changes. Please try again."


class QuillpostError(Exception):
    """Base class for application errors."""


class InvalidCredentials(QuillpostError):
    def __init__(self, message=GENERIC_LOGIN_FAILURE):
        super().__init__(message)


class EmailTaken(QuillpostError):
    def __init__(self, email):
        super().__init__(f"A user with email {email!r} already exists")
        self.email = email


class Unauthenticated(QuillpostError):
    pass


class StoreUnavailable(QuillpostError):
    """The database could not complete a query or a commit."""


class PostNotFound(NotFound):
    description = "That post does not exist."


class NotOwner(Forbidden):
    description = "You can only change your own posts."
