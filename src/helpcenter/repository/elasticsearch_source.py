import logging
from elasticsearch import exceptions, AsyncElasticsearch, helpers
from ..domain.exceptions import RecordFetchError
from ..domain.snapshot import RecordSnapshot
from ..utils import log_utils
from .record_source import RecordSource


class ElasticsearchRecordSource(RecordSource):

  @classmethod
  def configure_logging(cls, level: int):
    cls.loglevel = level
    cls.log = log_utils.create_console_logger(
      name=cls.__name__,
      level=level
    )

  def __init__(
      self,
      conn: str,
      user: str,
      password: str,
      cacerts: str,
      verify_certs: bool = True,
      categories_index: str = "categories",
      articles_index: str = "articles",
      log_level: int = logging.INFO,
      es: AsyncElasticsearch | None = None,
  ):
    self.configure_logging(log_level)
    self.categories_index = categories_index
    self.articles_index = articles_index

    if es is None:
      self.log.info(f"connecting to Elasticsearch at {conn}")
      es = AsyncElasticsearch(conn, basic_auth=(user, password), ca_certs=cacerts, verify_certs=verify_certs)
    self.es = es

  async def assert_indices(self):
    await self.assert_categories_index()
    await self.assert_articles_index()

  async def assert_categories_index(self):
    try:
      self.log.info(f"creating/asserting index '{self.categories_index}'")
      await self.es.indices.create(index=self.categories_index, mappings={
        "properties": {
          "name": {
            "type": "text",
            "fields": {
              "keyword": {
                "type": "keyword",
                "ignore_above": 256
              }
            }
          },
          "description": {
            "type": "text",
          },
          "icon_name": {
            "type": "keyword",
            "index": False,
          },
          "logo_url": {
            "type": "keyword",
            "index": False,
          },
          "color": {
            "type": "keyword",
            "index": False,
          },
          "created_at": {
            "type": "date",
          },
        }
      })
    except exceptions.BadRequestError as e:
      if e.message == "resource_already_exists_exception":
        self.log.info(f"index {self.categories_index} already exists")
      else:
        raise

  async def assert_articles_index(self):
    try:
      self.log.info(f"creating/asserting index '{self.articles_index}'")
      await self.es.indices.create(index=self.articles_index, mappings={
        "properties": {
          "question": {
            "type": "text",
          },
          "answer": {
            "type": "text",
          },
          "category_id": {
            "type": "keyword",
          },
          "tags": {
            "type": "keyword",
          },
          "views": {
            "type": "integer",
          },
          "helpful": {
            "type": "integer",
          },
          "created_at": {
            "type": "date",
          },
          "media": {
            "properties": {
              "kind": {
                "type": "keyword",
              },
              "locator": {
                "type": "keyword",
                "index": False, # media locators are never searched
              },
              "title": {
                "type": "text",
              },
              "description": {
                "type": "text",
              },
            }
          },
        }
      })
    except exceptions.BadRequestError as e:
      if e.message == "resource_already_exists_exception":
        self.log.info(f"index {self.articles_index} already exists")
      else:
        raise

  async def fetch(self) -> RecordSnapshot:
    try:
      categories = await self.__scan(self.categories_index)
      articles = await self.__scan(self.articles_index)
    except exceptions.ApiError as e:
      raise RecordFetchError(f"Elasticsearch error while fetching records: {e}") from e
    except (exceptions.ConnectionError, exceptions.ConnectionTimeout) as e:
      raise RecordFetchError(f"Elasticsearch unreachable: {e}") from e

    self.log.debug(f"fetched {len(categories)} categories and {len(articles)} articles")
    try:
      return RecordSnapshot.from_records(categories, articles)
    except ValueError as e:
      raise RecordFetchError(f"invalid documents in Elasticsearch: {e}") from e

  async def __scan(self, index: str) -> list[dict]:
    # scroll through the whole index sorted by _doc, so an unchanged index
    # yields its documents in the same order on every refresh
    docs = []
    async for doc in helpers.async_scan(
      self.es,
      index=index,
      query={"query": {"match_all": {}}, "sort": ["_doc"]},
      preserve_order=True,
    ):
      docs.append(self.__map_to_record(doc))
    return docs

  def __map_to_record(self, doc: dict) -> dict:
    # the '_id' field should always be present
    id = doc.get('_id', None)
    if id is None:
      raise RecordFetchError(f"no '_id' field found in doc: {doc}")

    # a stored 'id' wins, the same rule as the mongodb source
    record = dict(doc.get('_source') or {})
    if "id" not in record:
      record["id"] = id
    return record

  async def close(self):
    await self.es.close()
