"""Persistence layer for social links, recipes and conversion history.

Routers depend on the abstract `Repository`; two implementations exist:

- SqlRepository: SQLAlchemy session backed (default)
- MemoryRepository: process-local dicts keyed by per-table counters

Both return plain ORM model instances so response schemas can read them
with from_attributes.
"""

from __future__ import annotations

import abc
import itertools
import logging
import threading
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import SocialLink, Recipe, ConversionHistory

logger = logging.getLogger("precision_baker.repository")


class Repository(abc.ABC):
    # Social links
    @abc.abstractmethod
    def get_social_links(self, user_id: Optional[int] = None) -> list[SocialLink]: ...

    @abc.abstractmethod
    def create_social_link(self, data: dict[str, Any]) -> SocialLink: ...

    @abc.abstractmethod
    def update_social_link(self, link_id: int, data: dict[str, Any]) -> Optional[SocialLink]: ...

    @abc.abstractmethod
    def delete_social_link(self, link_id: int) -> bool: ...

    # Recipes
    @abc.abstractmethod
    def get_recipes(self, user_id: Optional[int] = None, featured: Optional[bool] = None) -> list[Recipe]: ...

    @abc.abstractmethod
    def get_recipe(self, recipe_id: int) -> Optional[Recipe]: ...

    @abc.abstractmethod
    def create_recipe(self, data: dict[str, Any]) -> Recipe: ...

    @abc.abstractmethod
    def update_recipe(self, recipe_id: int, data: dict[str, Any]) -> Optional[Recipe]: ...

    @abc.abstractmethod
    def delete_recipe(self, recipe_id: int) -> bool: ...

    # Conversion history
    @abc.abstractmethod
    def get_conversion_history(self, user_id: Optional[int] = None) -> list[ConversionHistory]: ...

    @abc.abstractmethod
    def save_conversion_history(self, data: dict[str, Any]) -> ConversionHistory: ...


def _apply(obj, data: dict[str, Any]):
    for key, value in data.items():
        setattr(obj, key, value)
    return obj


class SqlRepository(Repository):
    def __init__(self, db: Session):
        self.db = db

    def _create(self, model, data: dict[str, Any]):
        obj = model(**data)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def _update(self, model, obj_id: int, data: dict[str, Any]):
        obj = self.db.get(model, obj_id)
        if obj is None:
            return None
        _apply(obj, data)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def _delete(self, model, obj_id: int) -> bool:
        obj = self.db.get(model, obj_id)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.commit()
        return True

    def get_social_links(self, user_id=None):
        stmt = select(SocialLink).order_by(SocialLink.id)
        if user_id is not None:
            stmt = stmt.where(SocialLink.user_id == user_id)
        return list(self.db.execute(stmt).scalars().all())

    def create_social_link(self, data):
        return self._create(SocialLink, data)

    def update_social_link(self, link_id, data):
        return self._update(SocialLink, link_id, data)

    def delete_social_link(self, link_id):
        return self._delete(SocialLink, link_id)

    def get_recipes(self, user_id=None, featured=None):
        stmt = select(Recipe).order_by(Recipe.id)
        if user_id is not None:
            stmt = stmt.where(Recipe.user_id == user_id)
        if featured is not None:
            stmt = stmt.where(Recipe.featured == featured)
        return list(self.db.execute(stmt).scalars().all())

    def get_recipe(self, recipe_id):
        return self.db.get(Recipe, recipe_id)

    def create_recipe(self, data):
        return self._create(Recipe, data)

    def update_recipe(self, recipe_id, data):
        return self._update(Recipe, recipe_id, data)

    def delete_recipe(self, recipe_id):
        return self._delete(Recipe, recipe_id)

    def get_conversion_history(self, user_id=None):
        stmt = select(ConversionHistory).order_by(ConversionHistory.id)
        if user_id is not None:
            stmt = stmt.where(ConversionHistory.user_id == user_id)
        return list(self.db.execute(stmt).scalars().all())

    def save_conversion_history(self, data):
        return self._create(ConversionHistory, data)


class MemoryRepository(Repository):
    """Thread-safe in-memory store; ids start at 1 per table."""

    def __init__(self):
        self._lock = threading.Lock()
        self._tables: dict[type, dict[int, Any]] = {
            SocialLink: {},
            Recipe: {},
            ConversionHistory: {},
        }
        self._counters = {model: itertools.count(1) for model in self._tables}

    def _create(self, model, data: dict[str, Any]):
        with self._lock:
            obj_id = next(self._counters[model])
            obj = model(id=obj_id, **data)
            if model is Recipe and obj.featured is None:
                obj.featured = False
            self._tables[model][obj_id] = obj
            return obj

    def _list(self, model, user_id: Optional[int] = None):
        with self._lock:
            rows = list(self._tables[model].values())
        if user_id is not None:
            rows = [r for r in rows if r.user_id == user_id]
        return rows

    def _update(self, model, obj_id: int, data: dict[str, Any]):
        with self._lock:
            obj = self._tables[model].get(obj_id)
            if obj is None:
                return None
            return _apply(obj, data)

    def _delete(self, model, obj_id: int) -> bool:
        with self._lock:
            return self._tables[model].pop(obj_id, None) is not None

    def get_social_links(self, user_id=None):
        return self._list(SocialLink, user_id)

    def create_social_link(self, data):
        return self._create(SocialLink, data)

    def update_social_link(self, link_id, data):
        return self._update(SocialLink, link_id, data)

    def delete_social_link(self, link_id):
        return self._delete(SocialLink, link_id)

    def get_recipes(self, user_id=None, featured=None):
        rows = self._list(Recipe, user_id)
        if featured is not None:
            rows = [r for r in rows if r.featured == featured]
        return rows

    def get_recipe(self, recipe_id):
        with self._lock:
            return self._tables[Recipe].get(recipe_id)

    def create_recipe(self, data):
        return self._create(Recipe, data)

    def update_recipe(self, recipe_id, data):
        return self._update(Recipe, recipe_id, data)

    def delete_recipe(self, recipe_id):
        return self._delete(Recipe, recipe_id)

    def get_conversion_history(self, user_id=None):
        return self._list(ConversionHistory, user_id)

    def save_conversion_history(self, data):
        return self._create(ConversionHistory, data)


_memory_repository: Optional[MemoryRepository] = None
_memory_repository_lock = threading.Lock()


def get_memory_repository() -> MemoryRepository:
    """Process-wide memory store, seeded with the default data on first use."""
    global _memory_repository
    with _memory_repository_lock:
        if _memory_repository is None:
            from .seed import seed_defaults

            repo = MemoryRepository()
            seed_defaults(repo)
            logger.info("Initialized in-memory repository")
            _memory_repository = repo
        return _memory_repository
