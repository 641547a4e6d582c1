import asyncio
import pytest
from conftest import FixedSource
from helpcenter.domain.exceptions import ArticleNotFoundError, DataUnavailableError, RecordFetchError
from helpcenter.domain.snapshot import RecordSnapshot
from helpcenter.dto.search_query import PopularQuery, SearchQuery
from helpcenter.repository.record_store import RecordStore
from helpcenter.search.engine import SearchEngine
from helpcenter.service.help_center import HelpCenterService


def dated_snapshot():
  return RecordSnapshot.from_records(
    [
      {"id": "2", "name": "zeta"},
      {"id": "1", "name": "Alpha", "icon_name": "IconBook", "article_count": 99},
    ],
    [
      {"id": "a", "question": "Old", "category_id": "1", "created_at": "2024-01-01T00:00:00Z"},
      {"id": "b", "question": "Undated", "category_id": "1"},
      {"id": "c", "question": "New", "category_id": "1", "created_at": "2024-03-01T00:00:00Z"},
      {"id": "d", "question": "Other", "category_id": "2", "created_at": "2024-02-01T00:00:00Z"},
      {"id": "e", "question": "Orphan", "category_id": "9", "created_at": "2024-04-01T00:00:00Z"},
      {
        "id": "f",
        "question": "Video guide",
        "category_id": "2",
        "media_type": "youtube",
        "media_url": "https://www.youtube.com/watch?v=abc",
      },
      {
        "id": "g",
        "question": "Broken video",
        "category_id": "2",
        "media_type": "youtube",
        "media_url": "https://example.com/not-youtube",
      },
      {
        "id": "h",
        "question": "Screenshot",
        "category_id": "2",
        "media_type": "image",
        "media_url": "guides/shot.png",
      },
    ],
  )


def make_service(*results, **kwargs):
  store = RecordStore(FixedSource(*results))
  asyncio.run(store.refresh())
  return HelpCenterService(store, SearchEngine.from_config(), **kwargs)


def test_search(seed_snapshot):
  service = make_service(seed_snapshot)
  results = asyncio.run(service.search(SearchQuery(query="data", category_id="2")))

  assert results.total == 3
  assert [r.article.id for r in results.results] == ["3", "4", "6"]
  assert results.results[0].category.article_count == 3


def test_search_applies_default_limit(seed_snapshot):
  service = make_service(seed_snapshot, default_limit=2)

  assert asyncio.run(service.search(SearchQuery(query="sre"))).total == 2
  assert asyncio.run(service.search(SearchQuery(query="sre", limit=5))).total == 5


def test_blank_query_is_empty_result(seed_snapshot):
  service = make_service(seed_snapshot)
  assert asyncio.run(service.search(SearchQuery(query="  "))).total == 0


def test_list_categories_by_name_with_derived_counts():
  service = make_service(dated_snapshot())
  results = asyncio.run(service.list_categories())

  assert [c.name for c in results.results] == ["Alpha", "zeta"]
  assert results.results[0].article_count == 3
  assert results.results[0].icon == "IconBook"


def test_articles_by_category_most_recent_first():
  service = make_service(dated_snapshot())
  results = asyncio.run(service.get_articles_by_category("1"))
  assert [a.id for a in results.results] == ["c", "a", "b"]

  assert asyncio.run(service.get_articles_by_category("404")).total == 0


def test_popular_articles_skip_dangling_references():
  service = make_service(dated_snapshot())
  results = asyncio.run(service.get_popular_articles(PopularQuery(limit=3)))
  assert [r.article.id for r in results.results] == ["c", "d", "a"]


def test_get_article_resolves_youtube_media():
  service = make_service(dated_snapshot())
  hit = asyncio.run(service.get_article("f"))

  assert hit.category.id == "2"
  assert hit.article.media.kind == "youtube"
  assert hit.article.media.url == "https://www.youtube.com/embed/abc"


def test_get_article_resolves_storage_media():
  service = make_service(dated_snapshot(), media_base_url="https://project.supabase.co")
  hit = asyncio.run(service.get_article("h"))
  assert hit.article.media.url == "https://project.supabase.co/storage/v1/object/public/helpdesk_media/guides/shot.png"


def test_malformed_media_is_omitted():
  service = make_service(dated_snapshot())
  hit = asyncio.run(service.get_article("g"))
  assert hit.article.question == "Broken video"
  assert hit.article.media is None

  # no storage URL configured
  assert asyncio.run(service.get_article("h")).article.media is None


@pytest.mark.parametrize("article_id", ["missing", "e"])
def test_get_article_not_found(article_id):
  service = make_service(dated_snapshot())
  with pytest.raises(ArticleNotFoundError):
    asyncio.run(service.get_article(article_id))


def test_no_data_is_unavailable():
  service = make_service(RecordFetchError("down"))
  with pytest.raises(DataUnavailableError):
    asyncio.run(service.list_categories())

  status = service.status()
  assert status.state == "unavailable"
  assert status.article_count == 0
  assert status.last_error == "down"


def test_refresh_reports_degraded_status(seed_snapshot):
  service = make_service(seed_snapshot, RecordFetchError("down"))
  status = asyncio.run(service.refresh())

  assert status.state == "ready"
  assert status.degraded
  assert status.generation == 1
  assert status.category_count == 2
  assert status.article_count == 6


def test_articles_by_category_with_mixed_timestamps():
  snapshot = RecordSnapshot.from_records(
    [{"id": "1", "name": "c"}],
    [
      {"id": "naive", "question": "q", "category_id": "1", "created_at": "2024-01-01T00:00:00"},
      {"id": "aware", "question": "q", "category_id": "1", "created_at": "2024-02-01T00:00:00+00:00"},
    ],
  )
  service = make_service(snapshot)

  results = asyncio.run(service.get_articles_by_category("1"))
  assert [a.id for a in results.results] == ["aware", "naive"]


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_default_limit_is_rejected(seed_snapshot, limit):
  with pytest.raises(ValueError):
    make_service(seed_snapshot, default_limit=limit)
