"""
Campaign records as served by the campaigns API.

Relation fields (influencers, managers) may carry full nested objects while
a campaign sits in UI state. Before a campaign is sent back to the server it
goes through ``to_save_payload``, which reduces every relation to ``{id}``.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Relation fields reduced to references on the way out
RELATION_FIELDS = ("influencers", "managers")


class Ref(BaseModel):
    """
    Reference to a related entity.

    Extra attributes (name, image, ...) are kept while in UI state and
    dropped by the save projection.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))

    def as_reference(self) -> dict:
        return {"id": self.id}


class Campaign(BaseModel):
    """A campaign record. Identity is ``id`` (``_id`` accepted on input)."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    influencers: Optional[list[Ref]] = None
    managers: Optional[list[Ref]] = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    def __str__(self) -> str:
        return f"Campaign(id={self.id}, name={self.name})"


def _project_relation(refs: Optional[list[Ref]]) -> Optional[list[dict]]:
    if refs is None:
        return None
    return [ref.as_reference() for ref in refs]


def to_save_payload(campaign: Campaign) -> dict[str, Any]:
    """
    Project a campaign into the JSON body of a save request.

    Relation fields carry only ``{id}`` per entity, whatever detail the
    input had. Absent relations and a missing id are omitted.
    """
    payload = campaign.model_dump(mode="json", exclude=set(RELATION_FIELDS))
    if payload.get("id") is None:
        payload.pop("id", None)

    for field_name in RELATION_FIELDS:
        projected = _project_relation(getattr(campaign, field_name))
        if projected is not None:
            payload[field_name] = projected

    return payload
