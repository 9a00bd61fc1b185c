"""Request payloads for entity tag operations.

Field names are snake_case in Python and camelCase on the wire:

    TagAssignmentRequest(entity_id="42", entity_type="Page", tag_id="7")
    -> {"entityId": "42", "entityType": "Page", "tagId": "7"}
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityTagRequest(BaseModel):
    """Base for payloads that target a single tagged entity."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    entity_id: str
    entity_type: str


class TagAssignmentRequest(EntityTagRequest):
    """Attach a tag to an entity."""
    tag_id: str


class TagRemovalRequest(EntityTagRequest):
    """Detach a tag from an entity."""
    tag_id: str


class TagSetRequest(EntityTagRequest):
    """Replace the full set of tags on an entity."""
    tags: list[str]
