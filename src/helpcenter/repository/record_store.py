import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from ..domain.exceptions import DataUnavailableError, RecordFetchError, StoreLoadingError
from ..domain.snapshot import RecordSnapshot
from ..utils import log_utils
from .record_source import RecordSource


class StoreState(str, Enum):
  empty = "empty"
  loading = "loading"
  ready = "ready"
  unavailable = "unavailable"


class RecordStore:
  """Holds the current RecordSnapshot, replaced wholesale on every refresh.

  Refresh is the only writer. Each refresh gets a sequence number and only the
  most recently started one may install its result, older ones are discarded
  when they complete. A failed refresh keeps the last snapshot that loaded.
  """

  @classmethod
  def configure_logging(cls, level: int):
    cls.loglevel = level
    cls.log = log_utils.create_console_logger(
      name=cls.__name__,
      level=level
    )

  def __init__(self, source: RecordSource, log_level: int = logging.INFO):
    self.configure_logging(log_level)
    self.source = source

    self.__snapshot: RecordSnapshot | None = None
    self.__state = StoreState.empty
    self.__sequence = 0
    self.__inflight: asyncio.Task | None = None

    # number of successfully installed snapshots
    self.__generation = 0
    self.__last_error: str | None = None
    self.__last_error_time: datetime | None = None

  @property
  def state(self) -> StoreState:
    return self.__state

  @property
  def generation(self) -> int:
    return self.__generation

  @property
  def last_error(self) -> str | None:
    return self.__last_error

  @property
  def last_error_time(self) -> datetime | None:
    return self.__last_error_time

  @property
  def degraded(self) -> bool:
    # serving old data because the latest refresh failed
    return self.__last_error is not None

  @property
  def loaded_snapshot(self) -> RecordSnapshot | None:
    """Last installed snapshot regardless of the state, for status reporting."""
    return self.__snapshot

  async def refresh(self) -> bool:
    """Fetches a new snapshot from the source.

    Returns True when the fetched snapshot was installed, False when the fetch
    failed or was superseded by a newer refresh. Fetch errors are logged and
    never raised.
    """
    self.__sequence += 1
    sequence = self.__sequence
    self.__state = StoreState.loading

    self.log.info(f"refreshing records, fetch #{sequence}")
    task = asyncio.ensure_future(self.source.fetch())
    self.__inflight = task

    try:
      snapshot = await task
    except asyncio.CancelledError:
      if sequence == self.__sequence:
        self.__inflight = None
        self.__state = StoreState.ready if self.__snapshot is not None else StoreState.empty
      raise
    except Exception as e:
      return self.__fetch_failed(sequence, e)

    if sequence != self.__sequence:
      self.log.info(f"discarding stale fetch #{sequence}, fetch #{self.__sequence} started since")
      return False

    self.__snapshot = snapshot
    self.__state = StoreState.ready
    self.__inflight = None
    self.__generation += 1
    self.__last_error = None
    self.__last_error_time = None
    self.log.info(f"installed {snapshot} from fetch #{sequence}")
    return True

  def __fetch_failed(self, sequence: int, e: Exception) -> bool:
    if sequence != self.__sequence:
      self.log.warning(f"stale fetch #{sequence} failed: {e}")
      return False

    if isinstance(e, RecordFetchError):
      self.log.error(f"fetch #{sequence} failed: {e.message}")
    else:
      self.log.exception(f"fetch #{sequence} failed")

    self.__inflight = None
    self.__last_error = str(e)
    self.__last_error_time = datetime.now(timezone.utc)

    # keep serving the last known good data
    self.__state = StoreState.ready if self.__snapshot is not None else StoreState.unavailable
    return False

  def current(self) -> RecordSnapshot:
    """The snapshot for synchronous readers, which can't wait for a fetch."""
    if self.__state == StoreState.loading:
      raise StoreLoadingError("records are being loaded, try again later")
    if self.__snapshot is None:
      raise DataUnavailableError("help center data is not available")
    return self.__snapshot

  async def snapshot(self) -> RecordSnapshot:
    """The snapshot for asynchronous readers, waits for a fetch in progress."""
    while self.__state == StoreState.loading:
      inflight = self.__inflight
      if inflight is None or inflight.done():
        # the refresh coroutine hasn't picked up the result yet
        await asyncio.sleep(0)
        continue
      await asyncio.wait([inflight])

    return self.current()

  async def close(self) -> None:
    await self.source.close()
