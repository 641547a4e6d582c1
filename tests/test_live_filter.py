import asyncio
import pytest
from conftest import FixedSource, GatedSource, wait_for_fetches
from helpcenter.domain.exceptions import DataUnavailableError, StoreLoadingError
from helpcenter.repository.record_store import RecordStore
from helpcenter.search.engine import SearchEngine
from helpcenter.search.live_filter import LiveFilterController, LiveFilterError, LiveFilterState


@pytest.fixture
def ready_store(seed_snapshot):
  store = RecordStore(FixedSource(seed_snapshot))
  asyncio.run(store.refresh())
  return store


@pytest.fixture
def controller(ready_store):
  return LiveFilterController(ready_store, SearchEngine.from_config(match_strategy="question"))


def test_starts_idle(controller):
  assert controller.state == LiveFilterState.idle
  assert controller.results == []


def test_typing_shows_results(controller):
  assert controller.update_query("data") == LiveFilterState.results_shown
  assert [h.article.id for h in controller.results] == ["3", "6"]
  assert controller.results[0].category.name == "SRE Brain"


def test_every_keystroke_recomputes(controller):
  controller.update_query("d")
  many = len(controller.results)
  controller.update_query("da")
  controller.update_query("d")
  assert len(controller.results) == many


def test_no_match_is_results_empty(controller):
  assert controller.update_query("kubernetes") == LiveFilterState.results_empty
  assert controller.results == []


def test_clearing_the_query_returns_to_idle(controller):
  controller.update_query("data")
  assert controller.update_query("   ") == LiveFilterState.idle
  assert controller.results == []


def test_dismiss(controller):
  controller.update_query("data")
  assert controller.dismiss() == LiveFilterState.idle
  assert controller.query == ""
  assert controller.results == []


def test_select_emits_event_and_resets(ready_store):
  selected = []
  controller = LiveFilterController(
    ready_store,
    SearchEngine.from_config(),
    on_select=selected.append,
  )
  controller.update_query("format")

  event = controller.select("5")
  assert event.article.id == "5"
  assert event.category.id == "1"
  assert selected == [event]
  assert controller.state == LiveFilterState.idle
  assert controller.query == ""


def test_select_outside_results_is_rejected(controller):
  with pytest.raises(LiveFilterError):
    controller.select("1")

  controller.update_query("kubernetes")
  with pytest.raises(LiveFilterError):
    controller.select("1")

  controller.update_query("data")
  with pytest.raises(LiveFilterError):
    controller.select("1")
  assert controller.state == LiveFilterState.results_shown


def test_category_scoped_filter(ready_store):
  controller = LiveFilterController(ready_store, SearchEngine.from_config(), category_id="1")
  controller.update_query("sre")
  assert {h.category.id for h in controller.results} == {"1"}


def test_no_data_is_an_error():
  controller = LiveFilterController(RecordStore(FixedSource()), SearchEngine.from_config())
  with pytest.raises(DataUnavailableError):
    controller.update_query("data")
  assert controller.state == LiveFilterState.idle


def test_query_while_loading_is_rejected(seed_snapshot):
  source = GatedSource()
  store = RecordStore(source)
  controller = LiveFilterController(store, SearchEngine.from_config())

  async def run():
    refresh = asyncio.create_task(store.refresh())
    await wait_for_fetches(source, 1)
    with pytest.raises(StoreLoadingError):
      controller.update_query("data")
    assert controller.state == LiveFilterState.idle

    source.complete(0, seed_snapshot)
    await refresh
    return controller.update_query("data")

  assert asyncio.run(run()) == LiveFilterState.results_shown
