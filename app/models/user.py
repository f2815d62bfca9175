"""
User model for authentication.

Only admins may create, update or delete companies and jobs.
"""

from sqlalchemy import Column, String, Boolean, Text
from app.core.database import Base


class User(Base):
    """
    User account, identified by username.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    hashed_password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)  # Admin role for mutating endpoints

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
