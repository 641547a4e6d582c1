import pydantic


class CategoryResult(pydantic.BaseModel):
  id: str
  name: str
  description: str | None = None
  icon: str | None = None
  logo_url: str | None = None
  color: str | None = None

  # derived from the articles held by the store
  article_count: int | None = None


class CategoryResults(pydantic.BaseModel):
  total: int
  results: list[CategoryResult]
