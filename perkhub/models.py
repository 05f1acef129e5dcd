from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint
from datetime import datetime, timezone
from typing import Optional, List
from enum import Enum


"""
This file contains the models for the database tables.

We have 2 tables:
    - User
    - Perk
"""

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class PerkCategory(str, Enum):
    FOOD = "food"
    TECH = "tech"
    TRAVEL = "travel"
    FITNESS = "fitness"
    OTHER = "other"

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Perks listed by this account are removed with it
    perks: List["Perk"] = Relationship(back_populates="owner", sa_relationship_kwargs={"cascade": "all, delete-orphan"})

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"

class Perk(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("created_by", "title", name="uq_perk_creator_title"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: str = Field(default="")
    category: PerkCategory = Field(default=PerkCategory.OTHER)
    discount_percent: int = Field(default=0, ge=0, le=100)
    merchant: str = Field(index=True)
    created_by: int = Field(foreign_key="user.id", nullable=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationships
    owner: User = Relationship(back_populates="perks")
