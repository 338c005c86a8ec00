from datetime import datetime, timezone

import uuid6

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Table
from sqlalchemy.types import Uuid

from core.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


saved_recipes = Table(
    "saved_recipes",
    Base.metadata,
    Column("user_id", Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("recipe_id", Uuid(as_uuid=True), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), default=utc_now, nullable=False),
)

user_follows = Table(
    "user_follows",
    Base.metadata,
    Column("follower_id", Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("followee_id", Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), default=utc_now, nullable=False),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid6.uuid7)
    username = Column(String(30), nullable=False, unique=True)
    email = Column(String(128), nullable=False, unique=True)
    password = Column(String(256), nullable=False)
    dietary_preferences = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
