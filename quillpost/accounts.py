"""User registration and credential checks."""

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from . import db
from .errors import EmailTaken, InvalidCredentials, StoreUnavailable
from .models import User

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both failure paths hash once
_DUMMY_HASH = generate_password_hash("quillpost-timing-equalizer")


def normalize_email(email):
    return (email or "").strip().lower()


def find_user_by_email(email):
    try:
        return User.query.filter_by(email=normalize_email(email)).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] User lookup failed")
        raise StoreUnavailable("user lookup failed") from e


def register_user(email, password):
    """Create a user with a hashed password.

    Raises EmailTaken when the address is already registered, including when a
    concurrent registration wins the unique constraint at commit time.
    """
    email = normalize_email(email)
    if not email or not password:
        raise ValueError("email and password are required")

    if find_user_by_email(email) is not None:
        raise EmailTaken(email)

    user = User(email=email, password_hash=generate_password_hash(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise EmailTaken(email) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to create user %s", email)
        raise StoreUnavailable("could not create user") from e

    logger.info("[Auth] Registered user %s (id=%s)", email, user.id)
    return user


def authenticate(email, password):
    """Return the user for a valid email/password pair.

    Unknown emails and wrong passwords raise the same InvalidCredentials.
    """
    user = find_user_by_email(email)
    if user is None:
        check_password_hash(_DUMMY_HASH, password or "")
        raise InvalidCredentials()
    if not check_password_hash(user.password_hash, password or ""):
        raise InvalidCredentials()
    return user
