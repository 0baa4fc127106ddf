"""SQLAlchemy ORM models for Precision Baker.

Tables:
- social_links: Bio-page links (platform, handle, icon styling)
- recipes: Recipes with JSON ingredient lists and a featured flag
- conversion_history: Saved recipe conversions

Every table uses an auto-incrementing integer id and an optional owner
`user_id` used purely as a list filter (no auth).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text, Integer, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import false
from sqlalchemy.types import JSON

from .db import Base


class SocialLink(Base):
    __tablename__ = "social_links"
    __table_args__ = (
        Index("ix_social_links_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    platform: Mapped[str] = mapped_column(String(80), nullable=False)
    username: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    icon_class: Mapped[str] = mapped_column(String(80), nullable=False)
    bg_color_class: Mapped[str] = mapped_column(String(80), nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class Recipe(Base):
    """Recipe with its ingredient list stored as JSON.

    ingredients: [{"name": ..., "amount": "2 cups", "weight": "240g"}, ...]
    """
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_user_id", "user_id"),
        Index("ix_recipes_featured", "featured"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    ingredients: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class ConversionHistory(Base):
    __tablename__ = "conversion_history"
    __table_args__ = (
        Index("ix_conversion_history_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_recipe: Mapped[str] = mapped_column(Text, nullable=False)
    converted_recipe: Mapped[str] = mapped_column(Text, nullable=False)
    conversion_type: Mapped[str] = mapped_column(String(40), nullable=False)
    scale_factor: Mapped[str] = mapped_column(String(40), nullable=False)
    timestamp: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
