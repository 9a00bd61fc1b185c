"""Service layer for entity tag operations."""

from .client_proxy import EntityTagAdminClientProxy
from .dispatcher import Dispatch, HttpRemoteServiceDispatcher
from .dtos import TagAssignmentRequest, TagRemovalRequest, TagSetRequest
from .entity_tag_service import EntityTagService, InMemoryEntityTagService
from .errors import RemoteCallError, RemoteServiceErrorInfo, UnknownOperationError
from .factory import open_entity_tag_service
from .operations import ENTITY_TAG_ROUTES, EntityTagOperation

__all__ = [
    "Dispatch",
    "ENTITY_TAG_ROUTES",
    "EntityTagAdminClientProxy",
    "EntityTagOperation",
    "EntityTagService",
    "HttpRemoteServiceDispatcher",
    "InMemoryEntityTagService",
    "RemoteCallError",
    "RemoteServiceErrorInfo",
    "TagAssignmentRequest",
    "TagRemovalRequest",
    "TagSetRequest",
    "UnknownOperationError",
    "open_entity_tag_service",
]
