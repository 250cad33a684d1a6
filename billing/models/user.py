from sqlalchemy import Column, String

from billing.database import Base, generate_id


class User(Base):
    """Registered user. Only the password hash is ever stored."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
