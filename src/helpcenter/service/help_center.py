import logging
from ..domain.article import Article, SearchHit
from ..domain.category import Category
from ..domain.exceptions import ArticleNotFoundError, MalformedMediaDescriptor
from ..domain.snapshot import RecordSnapshot
from ..dto.article_result import ArticleResult, ArticleResults, MediaResult, SearchHitResult, SearchResults
from ..dto.category_result import CategoryResult, CategoryResults
from ..dto.search_query import PopularQuery, SearchQuery
from ..dto.store_status import StoreStatus
from ..media.resolver import resolve_media
from ..repository.record_store import RecordStore
from ..search.engine import SearchEngine
from ..utils import log_utils


class HelpCenterService:

  def __init__(
      self,
      store: RecordStore,
      engine: SearchEngine,
      default_limit: int | None = None,
      media_base_url: str | None = None,
      media_bucket: str = "helpdesk_media",
      log_level: int = logging.INFO,
  ):
    self.log = log_utils.create_console_logger(
      name=self.__class__.__name__,
      level=log_level
    )
    # None means no cap, 0 would silently hide every search result
    if default_limit is not None and default_limit < 1:
      raise ValueError(f"the default search result limit must be at least 1, got {default_limit}")

    self.store = store
    self.engine = engine
    self.default_limit = default_limit
    self.media_base_url = media_base_url
    self.media_bucket = media_bucket

  async def search(self, search_query: SearchQuery) -> SearchResults:
    self.log.info(f"searching for articles: {search_query}")

    snapshot = await self.store.snapshot()
    limit = search_query.limit if search_query.limit is not None else self.default_limit
    hits = self.engine.search_hits(
      snapshot,
      query=search_query.query,
      category_id=search_query.category_id,
      limit=limit,
    )
    return self.__map_to_search_results(hits, snapshot)

  async def list_categories(self) -> CategoryResults:
    snapshot = await self.store.snapshot()
    categories = sorted(snapshot.categories, key=lambda c: c.name.lower())
    return CategoryResults(
      total=len(categories),
      results=[self.__map_to_category_result(c, snapshot) for c in categories],
    )

  async def get_articles_by_category(self, category_id: str) -> ArticleResults:
    self.log.info(f"getting articles of category '{category_id}'")

    snapshot = await self.store.snapshot()
    articles = self.__most_recent_first(snapshot.articles_in_category(category_id))
    return ArticleResults(
      total=len(articles),
      results=[self.__map_to_article_result(a) for a in articles],
    )

  async def get_article(self, article_id: str) -> SearchHitResult:
    snapshot = await self.store.snapshot()

    article = snapshot.article(article_id)
    category = snapshot.category(article.category_id) if article is not None else None
    if article is None or category is None:
      raise ArticleNotFoundError(article_id)

    return SearchHitResult(
      article=self.__map_to_article_result(article, with_media=True),
      category=self.__map_to_category_result(category, snapshot),
    )

  async def get_popular_articles(self, popular_query: PopularQuery) -> SearchResults:
    # "popular" are the most recently created articles
    snapshot = await self.store.snapshot()
    articles = self.__most_recent_first(snapshot.discovery_order())

    hits = [
      SearchHit(article=a, category=snapshot.category(a.category_id))
      for a in articles if snapshot.category(a.category_id) is not None
    ]
    return self.__map_to_search_results(hits[:popular_query.limit], snapshot)

  async def refresh(self) -> StoreStatus:
    await self.store.refresh()
    return self.status()

  def status(self) -> StoreStatus:
    snapshot = self.store.loaded_snapshot
    return StoreStatus(
      state=self.store.state.value,
      degraded=self.store.degraded,
      last_error=self.store.last_error,
      last_error_time=self.store.last_error_time,
      fetched_at=snapshot.fetched_at if snapshot is not None else None,
      generation=self.store.generation,
      category_count=len(snapshot.categories) if snapshot is not None else 0,
      article_count=len(snapshot.articles) if snapshot is not None else 0,
    )

  def __most_recent_first(self, articles) -> list[Article]:
    # articles without a creation time keep their order, after the dated ones
    dated = [a for a in articles if a.created_at is not None]
    undated = [a for a in articles if a.created_at is None]
    return sorted(dated, key=lambda a: a.created_at, reverse=True) + undated

  def __map_to_search_results(self, hits: list[SearchHit], snapshot: RecordSnapshot) -> SearchResults:
    return SearchResults(
      total=len(hits),
      results=[SearchHitResult(
        article=self.__map_to_article_result(hit.article),
        category=self.__map_to_category_result(hit.category, snapshot),
      ) for hit in hits],
    )

  def __map_to_category_result(self, category: Category, snapshot: RecordSnapshot) -> CategoryResult:
    return CategoryResult(
      id=category.id,
      name=category.name,
      description=category.description,
      icon=category.icon,
      logo_url=category.logo_url,
      color=category.color,
      article_count=snapshot.article_count(category.id),
    )

  def __map_to_article_result(self, article: Article, with_media: bool = False) -> ArticleResult:
    return ArticleResult(
      id=article.id,
      question=article.question,
      answer=article.answer,
      category_id=article.category_id,
      tags=list(article.tags) if len(article.tags) > 0 else None,
      views=article.views,
      helpful=article.helpful,
      created_at=article.created_at,
      media=self.__map_to_media_result(article) if with_media else None,
    )

  def __map_to_media_result(self, article: Article) -> MediaResult | None:
    try:
      media = resolve_media(article.media, self.media_base_url, self.media_bucket)
    except MalformedMediaDescriptor as e:
      # the article is still shown, without its media
      self.log.warning(f"omitting media of article '{article.id}': {e.message}")
      return None

    if media is None:
      return None
    return MediaResult(
      kind=media.kind.value,
      url=media.url,
      title=media.title,
      description=media.description,
    )
