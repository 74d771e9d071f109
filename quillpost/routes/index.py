from . import main
from flask import current_app, render_template
from ..posts import list_posts

@main.route('/')
def index():
    latest = list_posts(limit=current_app.config["POSTS_ON_LANDING"])
    return render_template('index.html', posts=latest)
