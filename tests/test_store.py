import pytest

from core.store import ResultStore
from models.dto import SearchPhase, SearchState, Track


def _track(i, title="t"):
    return Track(i, title, "artist", "album", f"https://x/{i}.jpg")


@pytest.fixture
def store(qapp):
    s = ResultStore()
    s.events = []
    s.results_changed.connect(lambda tracks: s.events.append(("results", [t.id for t in tracks])))
    s.alert_changed.connect(lambda visible, msg: s.events.append(("alert", visible, msg)))
    s.phase_changed.connect(lambda phase: s.events.append(("phase", phase)))
    return s


def test_initial_state(store):
    assert store.state == SearchState()
    assert store.phase == SearchPhase.IDLE
    assert store.latest_seq == 0


def test_query_edits(store):
    store.set_query("daft")
    store.set_query("daft punk")
    assert store.state.query == "daft punk"
    assert store.events == []


def test_success_populates(store):
    seq = store.begin_search()
    store.set_phase(seq, SearchPhase.IN_FLIGHT)
    assert store.apply_results(seq, [_track(1), _track(2)])

    assert store.phase == SearchPhase.POPULATED
    assert [t.id for t in store.state.results] == [1, 2]
    assert not store.state.is_alert_visible
    assert store.events == [
        ("phase", SearchPhase.BUILDING),
        ("phase", SearchPhase.IN_FLIGHT),
        ("phase", SearchPhase.POPULATED),
        ("results", [1, 2]),
    ]


def test_failure_keeps_previous_results(store):
    store.apply_results(store.begin_search(), [_track(1)])

    seq = store.begin_search()
    assert store.apply_failure(seq, "Network error: down")

    assert store.phase == SearchPhase.FAILED
    assert [t.id for t in store.results] == [1]
    assert store.state.is_alert_visible
    assert store.state.alert_message == "Network error: down"
    assert store.events[-1] == ("alert", True, "Network error: down")


def test_success_after_failure_clears_alert(store):
    store.apply_failure(store.begin_search(), "Data decoding error")
    store.apply_results(store.begin_search(), [_track(5)])

    assert store.state == SearchState(query="", results=(_track(5),), is_alert_visible=False, alert_message="")
    assert ("alert", False, "") in store.events


def test_stale_results_are_dropped(store):
    first = store.begin_search()
    second = store.begin_search()
    assert second > first

    # the later trigger answers first, the earlier one arrives afterwards
    assert store.apply_results(second, [_track(2)])
    assert not store.apply_results(first, [_track(1)])
    assert not store.apply_failure(first, "Network error: late")

    assert [t.id for t in store.results] == [2]
    assert not store.state.is_alert_visible


def test_stale_phase_updates_are_ignored(store):
    first = store.begin_search()
    store.begin_search()
    store.set_phase(first, SearchPhase.DECODING)
    assert store.phase == SearchPhase.BUILDING


def test_dismiss_alert(store):
    store.apply_failure(store.begin_search(), "Invalid search term or URL")
    store.dismiss_alert()
    assert not store.state.is_alert_visible
    assert store.events[-1] == ("alert", False, "Invalid search term or URL")

    before = list(store.events)
    store.dismiss_alert()
    assert store.events == before


def test_results_replaced_wholesale(store):
    store.apply_results(store.begin_search(), [_track(1), _track(2), _track(3)])
    store.apply_results(store.begin_search(), [_track(9)])
    assert store.state.results == (_track(9),)
