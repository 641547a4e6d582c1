from pydantic import BaseModel, Field, field_validator
from typing import Annotated


class SearchQuery(BaseModel):
  # matched against question, answer and tags (or the question only),
  # None means no text filter, a blank query means no results
  query: Annotated[str | None, Field(max_length=200)] = None

  category_id: Annotated[str | None, Field()] = None

  # caps the number of returned results, None means the configured default
  limit: Annotated[int | None, Field(ge=1, le=100)] = None

  @field_validator("category_id")
  @classmethod
  def category_not_blank(cls, v: str | None) -> str | None:
    if v is None or v.strip() == "":
      return None
    return v.strip()


class PopularQuery(BaseModel):
  limit: Annotated[int, Field(ge=1, le=50)] = 5
