import asyncio
import pytest
from fastapi.testclient import TestClient
from conftest import FixedSource
from helpcenter.domain.exceptions import RecordFetchError
from helpcenter.helpcenter_main import app
from helpcenter.helpcenter_setup import get_help_center_service
from helpcenter.repository.record_store import RecordStore
from helpcenter.search.engine import SearchEngine
from helpcenter.service.help_center import HelpCenterService


PREFIX = "/api/v1/helpcenter"


def client_for(store: RecordStore) -> TestClient:
  service = HelpCenterService(store, SearchEngine.from_config(), default_limit=50)
  app.dependency_overrides[get_help_center_service] = lambda: service
  return TestClient(app)


@pytest.fixture
def client(seed_snapshot):
  store = RecordStore(FixedSource(seed_snapshot, seed_snapshot))
  asyncio.run(store.refresh())
  yield client_for(store)
  app.dependency_overrides.clear()


@pytest.fixture
def empty_client():
  store = RecordStore(FixedSource(RecordFetchError("down"), RecordFetchError("still down")))
  asyncio.run(store.refresh())
  yield client_for(store)
  app.dependency_overrides.clear()


def test_search(client):
  response = client.get(f"{PREFIX}/search", params={"q": "SRE Writer"})
  assert response.status_code == 200

  body = response.json()
  assert body["total"] == 3
  assert [r["article"]["id"] for r in body["results"]] == ["1", "2", "5"]
  assert body["results"][0]["category"]["name"] == "SRE Writer"
  assert "media" not in body["results"][0]["article"]


def test_search_blank_query(client):
  response = client.get(f"{PREFIX}/search", params={"q": " "})
  assert response.status_code == 200
  assert response.json() == {"total": 0, "results": []}


def test_search_without_query_lists_everything(client):
  response = client.get(f"{PREFIX}/search", params={"category": "2", "limit": 2})
  assert response.status_code == 200
  assert [r["article"]["id"] for r in response.json()["results"]] == ["3", "4"]


def test_search_unknown_category(client):
  response = client.get(f"{PREFIX}/search", params={"q": "data", "category": "404"})
  assert response.json()["total"] == 0


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": "many"}, {"q": "x" * 201}])
def test_search_invalid_params(client, params):
  response = client.get(f"{PREFIX}/search", params=params)
  assert response.status_code == 422
  assert len(response.json()["detail"]) > 0


def test_categories(client):
  body = client.get(f"{PREFIX}/categories").json()
  assert [c["name"] for c in body["results"]] == ["SRE Brain", "SRE Writer"]
  assert [c["article_count"] for c in body["results"]] == [3, 3]


def test_category_articles(client):
  body = client.get(f"{PREFIX}/categories/1/articles").json()
  assert [a["id"] for a in body["results"]] == ["1", "2", "5"]


def test_popular_articles(client):
  response = client.get(f"{PREFIX}/articles/popular")
  assert response.status_code == 200
  assert response.json()["total"] == 5

  assert client.get(f"{PREFIX}/articles/popular", params={"limit": 51}).status_code == 422


def test_article(client):
  body = client.get(f"{PREFIX}/articles/3").json()
  assert body["article"]["question"] == "Analisis data dengan SRE Brain"
  assert body["category"]["id"] == "2"


def test_article_not_found(client):
  response = client.get(f"{PREFIX}/articles/404")
  assert response.status_code == 404
  assert response.json()["detail"][0]["msg"] == "article '404' not found"


def test_status_and_refresh(client):
  status = client.get(f"{PREFIX}/status").json()
  assert status["state"] == "ready"
  assert status["generation"] == 1

  refreshed = client.post(f"{PREFIX}/refresh").json()
  assert refreshed["generation"] == 2
  assert refreshed["degraded"] is False


def test_no_data_is_service_unavailable(empty_client):
  response = empty_client.get(f"{PREFIX}/search", params={"q": "data"})
  assert response.status_code == 503
  assert response.headers["Retry-After"] == "5"

  status = empty_client.post(f"{PREFIX}/refresh").json()
  assert status["state"] == "unavailable"
  assert status["last_error"] == "still down"
