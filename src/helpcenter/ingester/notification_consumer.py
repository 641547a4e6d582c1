import json
from abc import ABC, abstractmethod
from typing import Awaitable, Callable
from ..utils import log_utils
from .redis_handler import RedisHandler


class AsyncNotificationConsumer(ABC):

  @abstractmethod
  async def consume(self, callback: Callable[[dict], Awaitable[None]], *callback_args) -> None:
    raise NotImplementedError


class RedisNotificationConsumer(AsyncNotificationConsumer):
  """Content change notifications published on a Redis stream.

  Entries carry a JSON document in their 'event' field, e.g.
    XADD helpcenter_updates * event '{"type": "articles_changed"}'
  Entries without it are delivered as an empty dict.
  """

  def __init__(self, handler: RedisHandler, stream_name: str):
    self.log = log_utils.create_console_logger(self.__class__.__name__)
    self.rh = handler
    self.stream_name = stream_name

  async def consume(self, callback, *callback_args) -> None:

    async def message_extractor_wrapper(message: tuple[str, dict]):
      raw = message[1].get("event")
      msg = {}
      if raw is not None:
        try:
          msg = json.loads(raw)
        except json.JSONDecodeError:
          self.log.warning(f"ignoring malformed event payload in message {message[0]}")
      await callback(msg, *callback_args)

    await self.rh.consume_stream(self.stream_name, message_extractor_wrapper)
