from pydantic import BaseModel
from datetime import datetime


class StoreStatus(BaseModel):
  state: str

  # true when serving the last good data after a failed refresh
  degraded: bool
  last_error: str | None = None
  last_error_time: datetime | None = None

  fetched_at: datetime | None = None
  generation: int
  category_count: int
  article_count: int
