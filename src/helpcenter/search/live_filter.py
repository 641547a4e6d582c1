import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from ..domain.article import Article, SearchHit
from ..domain.category import Category
from ..repository.record_store import RecordStore
from ..utils import log_utils
from .engine import SearchEngine
from .normalizer import is_empty_query


class LiveFilterState(str, Enum):
  # no query, nothing shown
  idle = "idle"

  # query changed, results being recomputed
  typing = "typing"

  results_shown = "results_shown"

  # non-empty query without matches, shown to the user as "not found"
  results_empty = "results_empty"


@dataclass(frozen=True)
class SelectionEvent:
  article: Article
  category: Category


class LiveFilterError(Exception):
  pass


class LiveFilterController:
  """Search-as-you-type over the records already held by the store.

  Every query change recomputes the full result set synchronously from the
  current snapshot, nothing is carried over between keystrokes and nothing is
  fetched. The scan is linear in the number of articles.
  """

  def __init__(
      self,
      store: RecordStore,
      engine: SearchEngine,
      category_id: str | None = None,
      on_select: Callable[[SelectionEvent], None] | None = None,
      log_level: int = logging.INFO,
  ):
    self.log = log_utils.create_console_logger(
      name=self.__class__.__name__,
      level=log_level,
    )
    self.store = store
    self.engine = engine
    self.category_id = category_id
    self.on_select = on_select

    self.state = LiveFilterState.idle
    self.query = ""
    self.results: list[SearchHit] = []

  def update_query(self, text: str) -> LiveFilterState:
    """Raises StoreLoadingError while the store is being refreshed."""
    if is_empty_query(text):
      self.query = text
      self.__clear()
      return self.state

    self.query = text
    self.state = LiveFilterState.typing
    try:
      snapshot = self.store.current()
    except Exception:
      self.__clear()
      raise

    self.results = self.engine.search_hits(snapshot, text, self.category_id)
    if len(self.results) > 0:
      self.state = LiveFilterState.results_shown
    else:
      self.state = LiveFilterState.results_empty

    self.log.debug(f"query {text!r}: {self.state.value}, {len(self.results)} results")
    return self.state

  def dismiss(self) -> LiveFilterState:
    # e.g. interaction outside of the search surface
    self.query = ""
    self.__clear()
    return self.state

  def select(self, article_id: str) -> SelectionEvent:
    if self.state != LiveFilterState.results_shown:
      raise LiveFilterError(f"nothing to select in state '{self.state.value}'")

    hit = next((h for h in self.results if h.article.id == article_id), None)
    if hit is None:
      raise LiveFilterError(f"article '{article_id}' is not in the current results")

    event = SelectionEvent(article=hit.article, category=hit.category)
    self.query = ""
    self.__clear()

    if self.on_select is not None:
      self.on_select(event)
    return event

  def __clear(self):
    self.results = []
    self.state = LiveFilterState.idle
