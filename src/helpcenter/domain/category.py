import pydantic
from datetime import datetime, timezone
from typing import Annotated


class Category(pydantic.BaseModel):
  model_config = pydantic.ConfigDict(
    frozen=True,
    populate_by_name=True,
    coerce_numbers_to_str=True,
  )

  id: str
  name: str
  description: str | None = None

  # the live store calls it 'icon_name', the static dataset 'icon'
  icon: Annotated[
    str | None,
    pydantic.Field(validation_alias=pydantic.AliasChoices("icon", "icon_name")),
  ] = None
  logo_url: str | None = None
  color: str | None = None
  created_at: datetime | None = None

  # cached value from the source, never authoritative,
  # see RecordSnapshot.article_count for the derived one
  article_count: Annotated[
    int | None,
    pydantic.Field(ge=0, validation_alias=pydantic.AliasChoices("article_count", "articleCount")),
  ] = None

  @pydantic.field_validator("created_at")
  @classmethod
  def naive_is_utc(cls, v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
      return v.replace(tzinfo=timezone.utc)
    return v
