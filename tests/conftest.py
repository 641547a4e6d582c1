import asyncio
import pytest
from helpcenter.domain.article import Article
from helpcenter.domain.category import Category
from helpcenter.domain.exceptions import RecordFetchError
from helpcenter.domain.snapshot import RecordSnapshot
from helpcenter.repository import seed_data
from helpcenter.repository.record_source import RecordSource


def make_article(id, question, category_id="1", **fields) -> Article:
  return Article(id=id, question=question, category_id=category_id, **fields)


def make_category(id, name=None, **fields) -> Category:
  return Category(id=id, name=name or f"category {id}", **fields)


class GatedSource(RecordSource):
  """Every fetch blocks until the test releases it with a snapshot or an error."""

  def __init__(self):
    self.pending: list[asyncio.Future] = []
    self.closed = False

  async def fetch(self) -> RecordSnapshot:
    future = asyncio.get_running_loop().create_future()
    self.pending.append(future)
    return await future

  def complete(self, index: int, snapshot: RecordSnapshot):
    self.pending[index].set_result(snapshot)

  def fail(self, index: int, message: str = "backend down"):
    self.pending[index].set_exception(RecordFetchError(message))

  async def close(self):
    self.closed = True


class FixedSource(RecordSource):

  def __init__(self, *results):
    # snapshots are returned, exceptions raised, one per fetch
    self.results = list(results)
    self.closed = False

  async def fetch(self) -> RecordSnapshot:
    result = self.results.pop(0)
    if isinstance(result, Exception):
      raise result
    return result

  async def close(self):
    self.closed = True


@pytest.fixture
def seed_snapshot() -> RecordSnapshot:
  return RecordSnapshot.from_records(seed_data.CATEGORIES, seed_data.ARTICLES)


@pytest.fixture
def scenario_snapshot() -> RecordSnapshot:
  return RecordSnapshot.from_records(
    [seed_data.CATEGORIES[0], seed_data.CATEGORIES[1]],
    [seed_data.ARTICLES[0], seed_data.ARTICLES[2]],
  )


async def wait_for_fetches(source: GatedSource, count: int):
  while len(source.pending) < count:
    await asyncio.sleep(0)
