"""Users and submitted tweets shown alongside a campaign."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class User(BaseModel):
    """A social account that can author tweets."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    screen_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("screen_name", "screenName")
    )
    image: Optional[str] = None


class SubmittedTweet(BaseModel):
    """A tweet submitted for a campaign, keyed by tweet id."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    author_id: str = Field(validation_alias=AliasChoices("author_id", "authorId"))
