import asyncio
import json
import logging
from pathlib import Path
from ..domain.exceptions import RecordFetchError
from ..domain.snapshot import RecordSnapshot
from ..utils import log_utils
from . import seed_data
from .record_source import RecordSource


class StaticRecordSource(RecordSource):
  """Serves a fixed dataset: in-memory records, a JSON file, or the built-in seed.

  The JSON file holds either the flat shape
    {"categories": [...], "articles": [...]}
  or the nested one, a list of categories each with its own "articles" list.
  The file is read again on every fetch, so edits show up on refresh.
  """

  def __init__(
      self,
      categories: list[dict] | None = None,
      articles: list[dict] | None = None,
      path: str | Path | None = None,
      log_level: int = logging.INFO,
  ):
    self.log = log_utils.create_console_logger(
      name=self.__class__.__name__,
      level=log_level,
    )
    self.path = Path(path) if path is not None else None

    if self.path is None and categories is None and articles is None:
      categories = seed_data.CATEGORIES
      articles = seed_data.ARTICLES
    self.categories = categories or []
    self.articles = articles or []

  async def fetch(self) -> RecordSnapshot:
    if self.path is None:
      return self.__build(self.categories, self.articles)

    data = await asyncio.to_thread(self.__read_file)
    if isinstance(data, list):
      try:
        return RecordSnapshot.from_nested(data)
      except ValueError as e:
        raise RecordFetchError(f"invalid records in {self.path}: {e}") from e

    if not isinstance(data, dict):
      raise RecordFetchError(f"unexpected top level JSON type in {self.path}: {type(data).__name__}")
    return self.__build(data.get("categories") or [], data.get("articles") or [])

  def __read_file(self):
    self.log.info(f"reading records from {self.path}")
    try:
      with open(self.path, encoding="utf-8") as f:
        return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
      raise RecordFetchError(f"failed to read records from {self.path}: {e}") from e

  def __build(self, categories: list[dict], articles: list[dict]) -> RecordSnapshot:
    try:
      return RecordSnapshot.from_records(categories, articles)
    except ValueError as e:
      # pydantic.ValidationError is a ValueError
      raise RecordFetchError(f"invalid records: {e}") from e
