class HelpCenterException(Exception):

  def __init__(self, message: str):
    super().__init__(message)
    self.message = message


class RecordFetchError(HelpCenterException):
  """The record source is unreachable or returned an error."""


class StoreLoadingError(HelpCenterException):
  """A fetch is in progress, the store can't be read synchronously."""


class DataUnavailableError(HelpCenterException):
  """No snapshot was ever loaded successfully."""


class ArticleNotFoundError(HelpCenterException):

  def __init__(self, article_id: str):
    super().__init__(f"article '{article_id}' not found")
    self.article_id = article_id


class MalformedMediaDescriptor(HelpCenterException):
  """The media locator can't be turned into a displayable URL."""
