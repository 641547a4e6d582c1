import pydantic
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any
from .category import Category


class MediaKind(str, Enum):
  image = "image"
  video = "video"
  youtube = "youtube"
  none = "none"


class MediaDescriptor(pydantic.BaseModel):
  model_config = pydantic.ConfigDict(frozen=True)

  kind: MediaKind = MediaKind.none

  # storage path for 'image' and 'video', a link for 'youtube'
  locator: str | None = None
  title: str | None = None
  description: str | None = None

  @pydantic.field_validator("kind", mode="before")
  @classmethod
  def unknown_kind_is_none(cls, v: Any) -> Any:
    if v is None:
      return MediaKind.none
    if isinstance(v, MediaKind):
      return v
    try:
      return MediaKind(str(v).strip().lower())
    except ValueError:
      # unsupported media never fails the article, it is simply not shown
      return MediaKind.none


# flat media columns of the live store, folded into a MediaDescriptor
MEDIA_COLUMNS = {
  "media_type": "kind",
  "media_url": "locator",
  "media_title": "title",
  "media_description": "description",
}


class Article(pydantic.BaseModel):
  model_config = pydantic.ConfigDict(
    frozen=True,
    populate_by_name=True,
    coerce_numbers_to_str=True,
  )

  id: str
  question: Annotated[
    str,
    pydantic.Field(validation_alias=pydantic.AliasChoices("question", "title")),
  ]
  answer: Annotated[
    str | None,
    pydantic.Field(validation_alias=pydantic.AliasChoices("answer", "content", "body")),
  ] = None
  category_id: Annotated[
    str | None,
    pydantic.Field(validation_alias=pydantic.AliasChoices("category_id", "categoryId")),
  ] = None
  tags: tuple[str, ...] = ()

  # popularity counters, not every source has them
  views: Annotated[int | None, pydantic.Field(ge=0)] = None
  helpful: Annotated[int | None, pydantic.Field(ge=0)] = None

  created_at: datetime | None = None
  media: MediaDescriptor | None = None

  @pydantic.model_validator(mode="before")
  @classmethod
  def fold_media_columns(cls, data: Any) -> Any:
    if not isinstance(data, dict) or data.get("media") is not None:
      return data

    media = {
      key: data[column] for column, key in MEDIA_COLUMNS.items() if data.get(column) is not None
    }
    if len(media) == 0:
      return data

    data = {k: v for k, v in data.items() if k not in MEDIA_COLUMNS}
    data["media"] = media
    return data

  @pydantic.field_validator("created_at")
  @classmethod
  def naive_is_utc(cls, v: datetime | None) -> datetime | None:
    # sources mix naive and offset timestamps, naive ones are taken as UTC
    if v is not None and v.tzinfo is None:
      return v.replace(tzinfo=timezone.utc)
    return v

  @pydantic.field_validator("tags", mode="before")
  @classmethod
  def normalize_tags(cls, v: Any) -> tuple[str, ...]:
    if v is None:
      return ()
    if isinstance(v, str):
      v = [v]

    tags: list[str] = []
    for tag in v:
      tag = str(tag).strip().lower()
      if tag == "" or tag in tags:
        continue
      tags.append(tag)
    return tuple(tags)


# an article paired with its owning category, for display grouping
class SearchHit(pydantic.BaseModel):
  model_config = pydantic.ConfigDict(frozen=True)

  article: Article
  category: Category
