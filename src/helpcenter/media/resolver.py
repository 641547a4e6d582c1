import pydantic
from urllib.parse import parse_qs, quote, urlparse
from ..domain.article import MediaDescriptor, MediaKind
from ..domain.exceptions import MalformedMediaDescriptor


YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"
YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "youtu.be", "www.youtu.be"}


class ResolvedMedia(pydantic.BaseModel):
  kind: MediaKind

  # what the presentation layer loads, an embed URL for youtube
  url: str
  title: str | None = None
  description: str | None = None


def extract_youtube_id(link: str) -> str | None:
  """Video id of a watch, short or embed YouTube link, None if there is none."""
  parsed = urlparse(link.strip())
  if parsed.netloc == "" and not parsed.scheme:
    # scheme-less links, 'youtu.be/abc'
    parsed = urlparse("https://" + link.strip())

  host = parsed.netloc.lower()
  if host not in YOUTUBE_HOSTS:
    return None

  if host.endswith("youtu.be"):
    video_id = parsed.path.lstrip("/").split("/")[0]
  elif parsed.path.startswith("/embed/"):
    video_id = parsed.path[len("/embed/"):].split("/")[0]
  elif parsed.path == "/watch":
    video_id = parse_qs(parsed.query).get("v", [""])[0]
  else:
    return None

  return video_id or None


def storage_public_url(base_url: str, bucket: str, path: str) -> str:
  # public object URL of a storage bucket, see MEDIA_PUBLIC_BASE_URL
  return f"{base_url.rstrip('/')}/storage/v1/object/public/{bucket}/{quote(path.lstrip('/'))}"


def resolve_media(
    media: MediaDescriptor | None,
    storage_base_url: str | None = None,
    bucket: str = "helpdesk_media",
) -> ResolvedMedia | None:
  """Turns a media descriptor into something displayable.

  Returns None when there is nothing to show. Raises MalformedMediaDescriptor
  when there should be something to show but the locator can't be resolved.
  """
  if media is None or media.kind == MediaKind.none or not media.locator:
    return None

  locator = media.locator.strip()
  if media.kind == MediaKind.youtube:
    video_id = extract_youtube_id(locator)
    if video_id is None:
      raise MalformedMediaDescriptor(f"invalid YouTube URL '{locator}'")
    url = YOUTUBE_EMBED_URL.format(video_id=video_id)

  elif locator.startswith(("http://", "https://")):
    url = locator

  else:
    # image and video locators are storage paths
    if not storage_base_url:
      raise MalformedMediaDescriptor(f"no storage URL configured to resolve '{locator}'")
    url = storage_public_url(storage_base_url, bucket, locator)

  return ResolvedMedia(
    kind=media.kind,
    url=url,
    title=media.title,
    description=media.description,
  )
