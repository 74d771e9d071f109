from flask import Blueprint

main = Blueprint('main', __name__)

from . import index, blogs  # noqa: E402, F401
