from typing import Iterable
from ..domain.article import Article


def filter_by_category(records: Iterable[Article], category_id: str | None = None) -> list[Article]:
  # no category means no filter, comparison is by identifier, never by name
  if category_id is None:
    return list(records)
  return [r for r in records if r.category_id == category_id]
