from typing import Iterable
from ..domain.article import Article, SearchHit
from ..domain.snapshot import RecordSnapshot


def assemble(
    matched_articles: Iterable[Article],
    snapshot: RecordSnapshot,
    limit: int | None = None,
) -> list[SearchHit]:
  """Pairs every matched article with its category, keeping the ranked order.

  Articles whose category can't be found in the snapshot are dropped, so are
  repeated article ids. 'limit' caps the number of returned hits.
  """
  if limit is not None and limit <= 0:
    return []

  hits: list[SearchHit] = []
  seen: set[str] = set()
  for article in matched_articles:
    if article.id in seen:
      continue

    category = snapshot.category(article.category_id)
    if category is None:
      continue

    seen.add(article.id)
    hits.append(SearchHit(article=article, category=category))

    if limit is not None and len(hits) >= limit:
      break

  return hits
