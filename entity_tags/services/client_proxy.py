"""Remote client proxy for the entity tag admin service.

Each method forwards its request to the dispatch primitive under a fixed
operation name and returns nothing. Errors from dispatch propagate as-is.
"""

from .dispatcher import Dispatch
from .dtos import TagAssignmentRequest, TagRemovalRequest, TagSetRequest
from .operations import EntityTagOperation


class EntityTagAdminClientProxy:
    """EntityTagService implementation that calls a remote service.

    Usage:
        async with HttpRemoteServiceDispatcher(api_url="https://cms.example.com") as dispatch:
            tags = EntityTagAdminClientProxy(dispatch)
            await tags.add_tag_to_entity(
                TagAssignmentRequest(entity_id="42", entity_type="Page", tag_id="7")
            )
    """

    def __init__(self, dispatch: Dispatch):
        self._dispatch = dispatch

    async def add_tag_to_entity(self, request: TagAssignmentRequest) -> None:
        await self._dispatch(EntityTagOperation.ADD_TAG_TO_ENTITY.value, request)

    async def remove_tag_from_entity(self, request: TagRemovalRequest) -> None:
        await self._dispatch(EntityTagOperation.REMOVE_TAG_FROM_ENTITY.value, request)

    async def set_entity_tags(self, request: TagSetRequest) -> None:
        await self._dispatch(EntityTagOperation.SET_ENTITY_TAGS.value, request)
