from datetime import datetime, timezone
from typing import Any, Iterable
from ..utils import log_utils
from .article import Article
from .category import Category


log = log_utils.create_console_logger("RecordSnapshot")


class RecordSnapshot:
  """Immutable view of every category and article known to the search subsystem.

  Categories keep their enumeration order and articles their source order.
  Identifiers are unique: when a source yields the same id twice, the first
  occurrence wins. Article counts are derived here, the ones coming from the
  source are ignored.
  """

  __slots__ = (
    "_categories",
    "_articles",
    "_categories_by_id",
    "_articles_by_id",
    "_article_counts",
    "_discovery_order",
    "_fetched_at",
  )

  def __init__(
      self,
      categories: Iterable[Category],
      articles: Iterable[Article],
      fetched_at: datetime | None = None,
  ):
    categories_by_id: dict[str, Category] = {}
    for category in categories:
      if category.id in categories_by_id:
        log.warning(f"duplicate category id '{category.id}', keeping the first one")
        continue
      categories_by_id[category.id] = category

    articles_by_id: dict[str, Article] = {}
    for article in articles:
      if article.id in articles_by_id:
        log.warning(f"duplicate article id '{article.id}', keeping the first one")
        continue
      articles_by_id[article.id] = article

    counts = {category_id: 0 for category_id in categories_by_id}
    grouped: dict[str, list[Article]] = {category_id: [] for category_id in categories_by_id}
    dangling: list[Article] = []
    for article in articles_by_id.values():
      if article.category_id in grouped:
        grouped[article.category_id].append(article)
        counts[article.category_id] += 1
      else:
        dangling.append(article)

    if len(dangling) > 0:
      log.debug(f"{len(dangling)} articles reference a missing category")

    discovery_order = [a for category_articles in grouped.values() for a in category_articles]
    discovery_order.extend(dangling)

    self._categories = tuple(categories_by_id.values())
    self._articles = tuple(articles_by_id.values())
    self._categories_by_id = categories_by_id
    self._articles_by_id = articles_by_id
    self._article_counts = counts
    self._discovery_order = tuple(discovery_order)
    self._fetched_at = fetched_at if fetched_at is not None else datetime.now(timezone.utc)

  @classmethod
  def from_records(
      cls,
      categories: Iterable[dict],
      articles: Iterable[dict],
      fetched_at: datetime | None = None,
  ) -> "RecordSnapshot":
    """Builds a snapshot from the flat shape: a category table and an article table."""
    return cls(
      categories=[Category.model_validate(c) for c in categories],
      articles=[Article.model_validate(a) for a in articles],
      fetched_at=fetched_at,
    )

  @classmethod
  def from_nested(cls, categories: Iterable[dict], fetched_at: datetime | None = None) -> "RecordSnapshot":
    """Builds a snapshot from categories carrying their own 'articles' list."""
    category_records: list[dict[str, Any]] = []
    article_records: list[dict[str, Any]] = []

    for raw in categories:
      category = {k: v for k, v in raw.items() if k != "articles"}
      category_records.append(category)

      for article in raw.get("articles") or []:
        if article.get("category_id") is None and article.get("categoryId") is None:
          article = {**article, "category_id": category.get("id")}
        article_records.append(article)

    return cls.from_records(category_records, article_records, fetched_at=fetched_at)

  @classmethod
  def empty(cls) -> "RecordSnapshot":
    return cls(categories=[], articles=[])

  @property
  def categories(self) -> tuple[Category, ...]:
    return self._categories

  @property
  def articles(self) -> tuple[Article, ...]:
    return self._articles

  @property
  def fetched_at(self) -> datetime:
    return self._fetched_at

  def category(self, category_id: str | None) -> Category | None:
    if category_id is None:
      return None
    return self._categories_by_id.get(category_id)

  def article(self, article_id: str) -> Article | None:
    return self._articles_by_id.get(article_id)

  def article_count(self, category_id: str) -> int:
    return self._article_counts.get(category_id, 0)

  def articles_in_category(self, category_id: str) -> list[Article]:
    return [a for a in self._articles if a.category_id == category_id]

  def discovery_order(self) -> tuple[Article, ...]:
    # category enumeration order, then article order within the category,
    # articles with a dangling category reference last
    return self._discovery_order

  def __len__(self) -> int:
    return len(self._articles)

  def __repr__(self) -> str:
    return (
      f"RecordSnapshot(categories={len(self._categories)}, "
      f"articles={len(self._articles)}, fetched_at={self._fetched_at.isoformat()})"
    )
