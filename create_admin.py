"""
Script to create an admin user, or promote an existing user to admin.

Accounts created through POST /auth/register are never admins, so the first
admin has to be created here.

Run this script from the project root:
    python create_admin.py <username> --email admin@example.com
"""

import argparse
import getpass
import os
import sys

# Add app to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.core.database import SessionLocal
from app.core.security import get_password_hash
from app.models.user import User


def create_admin(username: str, email: str, first_name: str, last_name: str) -> None:
    """Create the admin user, prompting for a password, or promote an existing user."""
    db = SessionLocal()

    try:
        user = db.query(User).filter(User.username == username).first()

        if user:
            if user.is_admin:
                print(f"User {username} is already an admin.")
                return
            user.is_admin = True
            db.commit()
            print(f"✓ Promoted {username} to admin")
            return

        password = getpass.getpass(f"Password for {username}: ")
        if len(password) < 5:
            print("Password must be at least 5 characters.")
            return
        if password != getpass.getpass("Repeat password: "):
            print("Passwords do not match.")
            return

        db.add(User(
            username=username,
            hashed_password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            email=email,
            is_admin=True,
        ))
        db.commit()
        print(f"✓ Admin user {username} created")

    except Exception as e:
        db.rollback()
        print(f"\n✗ Error creating admin: {e}")
        print("Database changes have been rolled back.")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("username")
    parser.add_argument("--email", required=True)
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    create_admin(args.username, args.email, args.first_name, args.last_name)
