"""Entity tag service interface and its local implementation.

Application code depends on ``EntityTagService`` only. The composition
root decides whether calls run in-process (``InMemoryEntityTagService``)
or go over the network (``EntityTagAdminClientProxy``).
"""

import asyncio
import logging
from typing import Protocol

from .dtos import TagAssignmentRequest, TagRemovalRequest, TagSetRequest

logger = logging.getLogger(__name__)


class EntityTagService(Protocol):
    """Protocol for entity tag operations (local or remote)."""

    async def add_tag_to_entity(self, request: TagAssignmentRequest) -> None: ...
    async def remove_tag_from_entity(self, request: TagRemovalRequest) -> None: ...
    async def set_entity_tags(self, request: TagSetRequest) -> None: ...


class InMemoryEntityTagService:
    """In-process entity tag store.

    Tags per entity are kept in insertion order. Adding a tag that is
    already present and removing one that is absent are both no-ops.
    """

    def __init__(self):
        self._tags: dict[tuple[str, str], list[str]] = {}
        self._lock = asyncio.Lock()

    async def add_tag_to_entity(self, request: TagAssignmentRequest) -> None:
        key = (request.entity_type, request.entity_id)
        async with self._lock:
            tags = self._tags.setdefault(key, [])
            if request.tag_id not in tags:
                tags.append(request.tag_id)
        logger.debug(f"Tag {request.tag_id} added to {request.entity_type}:{request.entity_id}")

    async def remove_tag_from_entity(self, request: TagRemovalRequest) -> None:
        key = (request.entity_type, request.entity_id)
        async with self._lock:
            tags = self._tags.get(key)
            if tags and request.tag_id in tags:
                tags.remove(request.tag_id)
        logger.debug(f"Tag {request.tag_id} removed from {request.entity_type}:{request.entity_id}")

    async def set_entity_tags(self, request: TagSetRequest) -> None:
        key = (request.entity_type, request.entity_id)
        async with self._lock:
            self._tags[key] = list(dict.fromkeys(request.tags))
        logger.debug(f"Tags of {request.entity_type}:{request.entity_id} set to {request.tags}")

    def get_entity_tags(self, entity_type: str, entity_id: str) -> list[str]:
        """Get a copy of the tags currently on an entity."""
        return list(self._tags.get((entity_type, entity_id), []))
