import sys
from getpass import getpass

from quillpost import create_app
from quillpost.accounts import register_user
from quillpost.errors import EmailTaken

if len(sys.argv) != 2:
    sys.exit("usage: python create_user.py EMAIL")

app = create_app(SCHEDULER_ENABLED=False)

with app.app_context():
    password = getpass("Password: ")
    if not password or password != getpass("Repeat password: "):
        sys.exit("Passwords are empty or do not match.")
    try:
        user = register_user(sys.argv[1], password)
    except EmailTaken:
        sys.exit(f"{sys.argv[1]} is already registered.")
    print(f"Created user {user.email} (id={user.id})")
