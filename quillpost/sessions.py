"""Server-side login sessions.

A session row maps an opaque token to a user and carries an absolute expiry
fixed at login. Flask-Login keeps the token in the signed cookie (it is what
``Principal.get_id`` returns) and hands it back to ``load_session`` on every
request. Expired rows are treated as anonymous and removed lazily; the
background purge job clears the ones nobody comes back for.
"""

import logging
import secrets
from flask import current_app
from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .errors import StoreUnavailable
from .models import LoginSession, utcnow

logger = logging.getLogger(__name__)


class Principal(UserMixin):
    """The authenticated identity attached to one request."""

    def __init__(self, user, token, expires_at):
        self.user = user
        self.token = token
        self.expires_at = expires_at

    @property
    def user_id(self):
        return self.user.id

    @property
    def email(self):
        return self.user.email

    def get_id(self):
        return self.token

    def owns(self, blog):
        return blog.user_id == self.user.id

    def __repr__(self):
        return f"<Principal {self.user.email}>"


def create_session(user, now=None):
    now = now or utcnow()
    token = secrets.token_urlsafe(32)
    expires_at = now + current_app.config["SESSION_LIFETIME"]
    record = LoginSession(token=token, user_id=user.id, created_at=now, expires_at=expires_at)
    db.session.add(record)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to create session for user %s", user.id)
        raise StoreUnavailable("could not create session") from e

    logger.debug("[Session] Created session for user %s until %s", user.id, expires_at)
    return Principal(user, token, expires_at)


def load_session(token, now=None):
    if not token:
        return None
    now = now or utcnow()
    try:
        record = LoginSession.query.filter_by(token=token).first()
        if record is None:
            return None
        if now >= record.expires_at:
            user_id = record.user_id
            db.session.delete(record)
            db.session.commit()
            logger.info("[Session] Session for user %s expired", user_id)
            return None
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to load session")
        raise StoreUnavailable("could not load session") from e

    return Principal(record.user, record.token, record.expires_at)


def destroy_session(token):
    """Delete the session row; True if one existed."""
    try:
        deleted = LoginSession.query.filter_by(token=token).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to destroy session")
        raise StoreUnavailable("could not destroy session") from e
    return deleted > 0


def purge_expired(now=None):
    now = now or utcnow()
    try:
        purged = LoginSession.query.filter(LoginSession.expires_at <= now).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to purge expired sessions")
        raise StoreUnavailable("could not purge sessions") from e

    if purged:
        logger.info("[Session] Purged %d expired sessions", purged)
    return purged
