"""Operation names and the route table they resolve against.

Operation names are the stable contract with the remote service's routing
table. The HTTP method, path and payload placement for each one live here
and are only read by the dispatcher.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Literal, Mapping

REMOTE_SERVICE_NAME = "CmsKitAdmin"

ENTITY_TAGS_PATH = "/api/cms-kit-admin/entity-tags"


class EntityTagOperation(str, Enum):
    """Closed set of remote operations exposed by the entity tag service."""

    ADD_TAG_TO_ENTITY = "AddTagToEntityAsync"
    REMOVE_TAG_FROM_ENTITY = "RemoveTagFromEntityAsync"
    SET_ENTITY_TAGS = "SetEntityTagsAsync"


@dataclass(frozen=True)
class RemoteRoute:
    """Where a remote operation lives and how its payload travels."""
    http_method: str
    path: str
    payload_in: Literal["body", "query"] = "body"


ENTITY_TAG_ROUTES: Mapping[str, RemoteRoute] = MappingProxyType({
    EntityTagOperation.ADD_TAG_TO_ENTITY.value: RemoteRoute("POST", ENTITY_TAGS_PATH),
    EntityTagOperation.REMOVE_TAG_FROM_ENTITY.value: RemoteRoute(
        "DELETE", ENTITY_TAGS_PATH, payload_in="query"
    ),
    EntityTagOperation.SET_ENTITY_TAGS.value: RemoteRoute("PUT", ENTITY_TAGS_PATH),
})
