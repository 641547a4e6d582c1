import asyncio
from redis import asyncio as aioredis
from redis import exceptions
from random import randint
from typing import Awaitable, Callable
from ..utils import log_utils


class RedisHandler:

  def __init__(
      self,
      redis_host: str,
      redis_port: int,
      client: aioredis.Redis | None = None,
      error_backoff_ms: int = 1000,
  ):
    self.log = log_utils.create_console_logger(
      self.__class__.__name__,
    )
    self.host = redis_host
    self.port = redis_port
    self.r = client

    # pause after an unexpected redis error, before reading again
    self.error_backoff_ms = error_backoff_ms

  async def connect(self):
    if self.r is None:
      self.r = aioredis.Redis(host=self.host, port=self.port, decode_responses=True)

    backoff = randint(500, 1000)
    while True:
      try:
        if await self.r.ping():
          return
      except (exceptions.ConnectionError, exceptions.TimeoutError):
        pass
      self.log.info(f"redis not ready, waiting {backoff} milliseconds")
      await asyncio.sleep(backoff / 1000)
      backoff = min(backoff * 2, 30000)

  async def consume_stream(
      self,
      stream_name: str,
      callback: Callable[..., Awaitable[None]],
      *callback_args,
      last_id: str = "$",
      block_ms: int = 10000,
      count: int = 10,
  ):
    """Calls 'callback' for every new entry of the stream, until cancelled.

    Every instance reads the whole stream, no consumer group is involved.
    '$' only delivers entries added after the call. Redis errors never stop
    the consumer: connection errors reconnect, anything else is logged and
    retried after a pause.
    """
    await self.connect()
    while last_id == "$":
      try:
        last_id = await self.latest_id(stream_name)
      except exceptions.RedisError as e:
        await self.__recover(e)
    self.log.info(f"consuming stream {stream_name} after id {last_id}")

    while True:
      try:
        messages = await self.r.xread(
          streams={stream_name: last_id},
          block=block_ms,
          count=count,
        )
      except exceptions.RedisError as e:
        await self.__recover(e)
        continue

      if not messages:
        self.log.debug(f"{block_ms} millis passed, no new messages")
        continue

      for message in messages[0][1]:
        last_id = message[0]
        try:
          await callback(message, *callback_args)
          self.log.debug(f"processed message {message}")
        except Exception:
          self.log.exception(f"error while processing message {message}")

  async def __recover(self, e: exceptions.RedisError):
    # only called from an except block
    if isinstance(e, (exceptions.ConnectionError, exceptions.TimeoutError)):
      self.log.warning(f"lost connection to redis ({e}), reconnecting")
      await self.connect()
      return

    self.log.exception(f"unknown redis error, retrying in {self.error_backoff_ms} milliseconds")
    await asyncio.sleep(self.error_backoff_ms / 1000)

  async def latest_id(self, stream_name: str) -> str:
    # id of the newest entry, '0-0' for an empty or missing stream
    entries = await self.r.xrevrange(stream_name, count=1)
    if not entries:
      return "0-0"
    return entries[0][0]

  async def close(self):
    if self.r is not None:
      await self.r.aclose()
