from pydantic import BaseModel
from datetime import datetime
from .category_result import CategoryResult


class MediaResult(BaseModel):
  kind: str
  url: str
  title: str | None = None
  description: str | None = None


class ArticleResult(BaseModel):
  id: str
  question: str
  answer: str | None = None
  category_id: str | None = None
  tags: list[str] | None = None
  views: int | None = None
  helpful: int | None = None
  created_at: datetime | None = None

  # only set when the article's media could be resolved
  media: MediaResult | None = None


class ArticleResults(BaseModel):
  total: int
  results: list[ArticleResult]


class SearchHitResult(BaseModel):
  article: ArticleResult
  category: CategoryResult


class SearchResults(BaseModel):
  total: int
  results: list[SearchHitResult]
