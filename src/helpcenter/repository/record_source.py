from abc import ABC, abstractmethod
from ..domain.snapshot import RecordSnapshot


class RecordSource(ABC):

  @abstractmethod
  async def fetch(self) -> RecordSnapshot:
    """Reads every category and article, raises RecordFetchError on failure."""
    raise NotImplementedError

  async def close(self) -> None:
    """Releases the connections held by the source."""
    return None
