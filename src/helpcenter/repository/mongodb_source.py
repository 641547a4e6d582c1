import asyncio
import logging
from pymongo import MongoClient, collection, errors
from ..domain.exceptions import RecordFetchError
from ..domain.snapshot import RecordSnapshot
from ..utils import log_utils
from .record_source import RecordSource


class MongoRecordSource(RecordSource):
  """Reads the 'categories' and 'articles' collections of a MongoDB database.

  pymongo is blocking, the reads run in a worker thread.
  """

  def __init__(
      self,
      host: str,
      port: int | None = None,
      db_name: str = "helpcenter",
      categories_collection: str = "categories",
      articles_collection: str = "articles",
      log_level: int = logging.INFO,
      client: MongoClient | None = None,
  ):
    self.log = log_utils.create_console_logger(
      self.__class__.__name__,
      level=log_level,
    )
    self.db_name = db_name
    self.categories_collection = categories_collection
    self.articles_collection = articles_collection

    if client is not None:
      self.__mc = client
      return

    try:
      self.__mc = MongoClient(host=host, port=port, uuidRepresentation='standard')
      self.log.info(f"connected to mongodb, host {host}, port {port}")
    except Exception:
      self.log.exception("failed to connect to mongodb")
      raise

  async def fetch(self) -> RecordSnapshot:
    return await asyncio.to_thread(self.__fetch)

  def __fetch(self) -> RecordSnapshot:
    try:
      categories = self.__read_all(self.categories_collection)
      articles = self.__read_all(self.articles_collection)
    except errors.PyMongoError as e:
      raise RecordFetchError(f"mongodb error while fetching records: {e}") from e

    self.log.debug(f"fetched {len(categories)} categories and {len(articles)} articles")
    try:
      return RecordSnapshot.from_records(categories, articles)
    except ValueError as e:
      raise RecordFetchError(f"invalid documents in mongodb: {e}") from e

  def __read_all(self, collection_name: str) -> list[dict]:
    coll = self.get_collection(collection_name)

    # natural order, '_id' becomes the record id
    return [self.__map_to_record(doc) for doc in coll.find({})]

  def __map_to_record(self, doc: dict) -> dict:
    record = {k: v for k, v in doc.items() if k != "_id"}
    if "id" not in record:
      record["id"] = str(doc["_id"])
    return record

  def get_collection(self, collection_name: str) -> collection.Collection:
    return self.__mc.get_database(self.db_name).get_collection(collection_name)

  async def close(self):
    self.__mc.close()
