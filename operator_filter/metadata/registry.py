"""
Entity registry.

Entities are registered once, at application bootstrap, and resolved by
model class or ``app_label.model_name`` label afterwards. The registry only
grows while filters are being declared; request handling reads it.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Type, Union

from django.apps import apps
from django.db import models

from .relations import EntityRef, build_entity

logger = logging.getLogger(__name__)

OwnerLike = Union[EntityRef, Type[models.Model], str, None]


class EntityRegistry:
    """Registry of EntityRef objects keyed by model label."""

    def __init__(self):
        self._entities: Dict[str, EntityRef] = {}
        self._lock = threading.Lock()

    def register(self, model: Type[models.Model]) -> EntityRef:
        """Register ``model`` and return its EntityRef (idempotent)."""
        label = model._meta.label_lower
        with self._lock:
            entity = self._entities.get(label)
            if entity is not None and entity.model is model:
                return entity
            entity = build_entity(model)
            self._entities[label] = entity
        logger.debug(
            f"Registered entity {label} with relations: {', '.join(entity.relations) or '-'}"
        )
        return entity

    def get(self, model_or_label: Union[Type[models.Model], str]) -> Optional[EntityRef]:
        """Return the registered EntityRef, or None."""
        if isinstance(model_or_label, str):
            label = model_or_label.lower()
        else:
            label = model_or_label._meta.label_lower
        return self._entities.get(label)

    def resolve(self, owner: OwnerLike) -> Optional[EntityRef]:
        """
        Turn an owner reference into an EntityRef.

        Accepts an EntityRef (returned as-is), a model class or a
        ``app_label.ModelName`` label (registered on first use), or None.
        """
        if owner is None or isinstance(owner, EntityRef):
            return owner
        if isinstance(owner, str):
            entity = self.get(owner)
            if entity is not None:
                return entity
            owner = apps.get_model(owner)
        return self.register(owner)

    def clear(self) -> None:
        """Forget every registered entity. Intended for tests."""
        with self._lock:
            self._entities.clear()

    def __contains__(self, model_or_label: Union[Type[models.Model], str]) -> bool:
        return self.get(model_or_label) is not None

    def __len__(self) -> int:
        return len(self._entities)


entity_registry = EntityRegistry()


def get_entity(owner: OwnerLike) -> Optional[EntityRef]:
    """Resolve ``owner`` through the default registry."""
    return entity_registry.resolve(owner)


__all__ = ["EntityRegistry", "entity_registry", "get_entity", "OwnerLike"]
