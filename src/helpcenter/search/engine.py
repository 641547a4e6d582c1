import logging
from ..domain.article import Article, SearchHit
from ..domain.snapshot import RecordSnapshot
from ..utils import log_utils
from .assembler import assemble
from .category_filter import filter_by_category
from .matcher import Matcher, MatchStrategy, build_matcher
from .normalizer import normalize
from .ranker import Ranker, RankPolicy, build_ranker


class SearchEngine:
  """Search over a RecordSnapshot: normalize, filter, match, rank, assemble.

  Every call is a pure computation over the given snapshot, calling it twice
  with the same arguments gives the same result.
  """

  def __init__(self, matcher: Matcher, ranker: Ranker, log_level: int = logging.INFO):
    self.log = log_utils.create_console_logger(
      name=self.__class__.__name__,
      level=log_level,
    )
    self.matcher = matcher
    self.ranker = ranker

  @classmethod
  def from_config(
      cls,
      match_strategy: MatchStrategy | str = MatchStrategy.multi_field,
      rank_policy: RankPolicy | str = RankPolicy.views,
      log_level: int = logging.INFO,
  ) -> "SearchEngine":
    return cls(
      matcher=build_matcher(match_strategy),
      ranker=build_ranker(rank_policy),
      log_level=log_level,
    )

  def search(
      self,
      snapshot: RecordSnapshot,
      query: str | None = None,
      category_id: str | None = None,
  ) -> list[Article]:
    """Ranked articles matching 'query' within 'category_id'.

    A None query applies no text filter. A blank query is the empty query
    and returns no results at all.
    """
    normalized = None
    if query is not None:
      normalized = normalize(query)
      if normalized is None:
        return []

    records = filter_by_category(snapshot.discovery_order(), category_id)
    if normalized is not None:
      records = [r for r in records if self.matcher.matches(normalized, r)]

    ranked = self.ranker.rank(records)
    self.log.debug(
      f"query {normalized!r} in category {category_id!r}: {len(ranked)} matches "
      f"({self.matcher.strategy.value}, ranked by {self.ranker.policy.value})"
    )
    return ranked

  def search_hits(
      self,
      snapshot: RecordSnapshot,
      query: str | None = None,
      category_id: str | None = None,
      limit: int | None = None,
  ) -> list[SearchHit]:
    return assemble(self.search(snapshot, query, category_id), snapshot, limit=limit)
