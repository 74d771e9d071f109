"""Blog post queries and owner-scoped mutations.

Reads are public. Every mutation filters on both the post id and the owner
id, so a principal can never touch a post that is not theirs.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from . import db
from .errors import NotOwner, PostNotFound, StoreUnavailable
from .models import Blog

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200


def _newest_first(query):
    return query.order_by(Blog.created_at.desc(), Blog.id.desc())


def _read(description, fn):
    try:
        return fn()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to %s", description)
        raise StoreUnavailable(f"could not {description}") from e


def _commit(description):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to %s", description)
        raise StoreUnavailable(f"could not {description}") from e


def _clean(title, content):
    title = (title or "").strip()
    if not title or not (content or "").strip():
        raise ValueError("title and content are required")
    return title[:TITLE_MAX_LENGTH], content


def list_posts(limit=None):
    def run():
        query = _newest_first(Blog.query.options(joinedload(Blog.author)))
        if limit:
            query = query.limit(limit)
        return query.all()
    return _read("list posts", run)


def get_post(post_id):
    post = _read("load post", lambda: Blog.query.options(joinedload(Blog.author)).filter_by(id=post_id).first())
    if post is None:
        raise PostNotFound()
    return post


def posts_for_owner(owner_id):
    return _read("list posts by owner", lambda: _newest_first(Blog.query.filter_by(user_id=owner_id)).all())


def create_post(owner_id, title, content):
    title, content = _clean(title, content)
    post = Blog(title=title, content=content, user_id=owner_id)
    db.session.add(post)
    _commit("create post")
    logger.info("[DB] User %s created post %s", owner_id, post.id)
    return post


def get_owned_post(post_id, owner_id):
    """Load a post for editing; NotOwner unless it exists and belongs to owner_id."""
    post = _read("load post", lambda: Blog.query.filter_by(id=post_id, user_id=owner_id).first())
    if post is None:
        raise NotOwner()
    return post


def update_post(post_id, owner_id, title, content):
    title, content = _clean(title, content)
    post = get_owned_post(post_id, owner_id)
    post.title = title
    post.content = content
    _commit("update post")
    logger.info("[DB] User %s updated post %s", owner_id, post_id)
    return post


def delete_post(post_id, owner_id):
    """Delete the post if owner_id owns it. Returns False when nothing matched."""
    try:
        deleted = Blog.query.filter_by(id=post_id, user_id=owner_id).delete()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("[DB] Failed to delete post %s", post_id)
        raise StoreUnavailable("could not delete post") from e
    _commit("delete post")
    if deleted:
        logger.info("[DB] User %s deleted post %s", owner_id, post_id)
    return deleted > 0
