from quillpost import create_app
from quillpost.models import Blog, LoginSession, User, utcnow

app = create_app(SCHEDULER_ENABLED=False)

with app.app_context():
    # --- Counts ---
    print("=== Row Counts ===")
    print(f"Users: {User.query.count()}")
    print(f"Blogs: {Blog.query.count()}")
    print(f"Live sessions: {LoginSession.query.filter(LoginSession.expires_at > utcnow()).count()}")

    print("\n=== Newest Users ===")
    for user in User.query.order_by(User.id.desc()).limit(5).all():
        print(f"ID: {user.id}, Email: {user.email}, Posts: {len(user.blogs)}")

    print("\n=== Newest Blogs ===")
    for blog in Blog.query.order_by(Blog.created_at.desc()).limit(5).all():
        print(f"ID: {blog.id}, Title: {blog.title}, Author: {blog.author.email}, Created: {blog.created_at}")
