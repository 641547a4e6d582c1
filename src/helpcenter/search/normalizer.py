def normalize(raw: str | None) -> str | None:
  """Trims and lowercases a raw query.

  Returns None for the empty query (None, '' or only whitespace). Callers
  must treat that as "show nothing", never as "match everything".

  Lowercasing is plain `str.lower()`: no locale rules, no accent stripping,
  so 'café' only matches 'café'.
  """
  if raw is None:
    return None

  trimmed = raw.strip()
  if trimmed == "":
    return None

  return trimmed.lower()


def is_empty_query(raw: str | None) -> bool:
  return normalize(raw) is None
