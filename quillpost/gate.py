from functools import wraps
from flask_login import current_user

from .errors import Unauthenticated


def current_principal():
    """The request's Principal, or None for anonymous visitors."""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def principal_required(view):
    """Deny anonymous requests; otherwise call ``view(principal, ...)``."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            raise Unauthenticated()
        return view(principal, *args, **kwargs)
    return wrapper
