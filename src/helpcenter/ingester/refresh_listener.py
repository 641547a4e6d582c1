from ..repository.record_store import RecordStore
from ..utils import log_utils
from .notification_consumer import AsyncNotificationConsumer


log = log_utils.create_console_logger("RefreshListener")


async def refresh_on_notification(event: dict, store: RecordStore):
  log.info(f"content change notification {event}, refreshing records")
  await store.refresh()


async def listen_for_refreshes(consumer: AsyncNotificationConsumer, store: RecordStore):
  """Refreshes the store on every notification, runs until cancelled."""
  await consumer.consume(refresh_on_notification, store)
