from quillpost import create_app, db

app = create_app(SCHEDULER_ENABLED=False)

with app.app_context():
    db.drop_all()
    print("Database and all tables deleted successfully.")
