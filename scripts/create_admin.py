"""Script to create the initial admin user.

Run from the project root after ``pip install -e .``:

    ADMIN_EMAIL=chief@team.example ADMIN_PASSWORD=... python scripts/create_admin.py
"""
import os

from motorsports.auth import get_password_hash
from motorsports.config import settings
from motorsports.database import build_engine, build_session_factory, init_db
from motorsports.models.user import User, UserRole


def create_admin():
    """Create initial admin user if none exists."""
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)

    db = build_session_factory(engine)()
    try:
        admin = db.query(User).filter(User.role == UserRole.ADMIN.value).first()
        if admin:
            print(f"Admin user already exists: {admin.email}")
            return

        email = os.environ.get("ADMIN_EMAIL", "admin@example.com").lower()
        password = os.environ.get("ADMIN_PASSWORD", "admin12345")
        admin_user = User(
            email=email,
            password_hash=get_password_hash(password),
            first_name="System",
            last_name="Administrator",
            role=UserRole.ADMIN.value,
            is_active=True
        )
        db.add(admin_user)
        db.commit()
        print("Admin user created successfully!")
        print(f"Email: {email}")
        if "ADMIN_PASSWORD" not in os.environ:
            print(f"Password: {password}")
            print("\nSet ADMIN_PASSWORD to choose a password instead of the default.")

    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    create_admin()
