import asyncio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from .api import help_center
from .api import exception_handlers
from .ingester.notification_consumer import RedisNotificationConsumer
from .ingester.redis_handler import RedisHandler
from .ingester.refresh_listener import listen_for_refreshes
from .utils import log_utils
from .helpcenter_setup import (
  LOG_LEVEL,
  CORS_ALLOWED_HEADERS,
  CORS_ALLOWED_METHODS,
  CORS_ALLOWED_ORIGINS,
  CORS_ALLOW_CREDENTIALS,
  REDIS_HOST,
  REDIS_PORT,
  REDIS_REFRESH_ENABLED,
  REDIS_REFRESH_STREAM,
)


log = log_utils.create_console_logger("HelpCenter", LOG_LEVEL)

tags_metadata = [
   {
      "name": "Help Center",
      "description": "Browse categories, read and search articles."
   }
]


def log_listener_exit(task: asyncio.Task):
  if task.cancelled():
    return
  e = task.exception()
  if e is not None:
    log.error("refresh listener stopped, content changes won't refresh the records", exc_info=e)


# loads the records on startup, listens for content changes,
# and closes the record source when the app closes
@asynccontextmanager
async def manage_records(app: FastAPI):
  from .helpcenter_setup import record_store
  # startup
  await record_store.refresh()

  listener = None
  redis_handler = None
  if REDIS_REFRESH_ENABLED:
    redis_handler = RedisHandler(REDIS_HOST, REDIS_PORT)
    consumer = RedisNotificationConsumer(redis_handler, REDIS_REFRESH_STREAM)
    listener = asyncio.create_task(listen_for_refreshes(consumer, record_store))
    listener.add_done_callback(log_listener_exit)

  try:
    yield

  # shutdown
  finally:
    if listener is not None:
      listener.cancel()
      # a failed listener was already logged by log_listener_exit
      await asyncio.wait([listener])
    try:
      if redis_handler is not None:
        await redis_handler.close()
    finally:
      await record_store.close()


app = FastAPI(
  openapi_tags=tags_metadata,
  lifespan=manage_records,
)

for h in exception_handlers.handlers:
  app.add_exception_handler(*h)

app.add_middleware(
  CORSMiddleware,
  allow_origins=CORS_ALLOWED_ORIGINS,
  allow_credentials=CORS_ALLOW_CREDENTIALS,
  allow_methods=CORS_ALLOWED_METHODS,
  allow_headers=CORS_ALLOWED_HEADERS,
)

app.include_router(router=help_center.router)
