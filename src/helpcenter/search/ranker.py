from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence
from ..domain.article import Article


class RankPolicy(str, Enum):
  views = "views"
  helpful = "helpful"

  # keep discovery order
  none = "none"


class Ranker(ABC):

  policy: RankPolicy

  @abstractmethod
  def rank(self, records: Sequence[Article]) -> list[Article]:
    raise NotImplementedError


class DiscoveryOrderRanker(Ranker):

  policy = RankPolicy.none

  def rank(self, records: Sequence[Article]) -> list[Article]:
    return list(records)


class PopularityRanker(Ranker):
  """Most popular first, by one of the article's popularity counters.

  The sort is stable, equal counters keep their incoming relative order.
  A missing counter counts as 0. When not a single record carries the
  counter the incoming order is returned untouched.
  """

  def __init__(self, policy: RankPolicy = RankPolicy.views):
    if policy == RankPolicy.none:
      raise ValueError("PopularityRanker needs a popularity counter, use DiscoveryOrderRanker instead")
    self.policy = policy
    self.field = policy.value

  def rank(self, records: Sequence[Article]) -> list[Article]:
    records = list(records)
    if not any(getattr(r, self.field) is not None for r in records):
      return records

    # sorted() is stable, reverse=True keeps the relative order of equal keys
    return sorted(records, key=lambda r: getattr(r, self.field) or 0, reverse=True)


def build_ranker(policy: RankPolicy | str) -> Ranker:
  policy = RankPolicy(policy)
  if policy == RankPolicy.none:
    return DiscoveryOrderRanker()
  return PopularityRanker(policy)
