import json

import httpx
import pytest
from fastapi.testclient import TestClient

from mealrota.api.api_run import app
from mealrota.api.routes import state as state_routes
from mealrota.domain.PlanningState import PlanningState
from mealrota.infra.Local_Store import LocalStore
from mealrota.infra.Remote_Store import RemoteStateClient
from mealrota.infra.State_Repository import StateRepository, build_repository
from mealrota.logic.planner import transitions as t
from mealrota.utilities.constants import AUTOSAVE_KEY


@pytest.fixture
def planned_state():
    state = t.ensure_sample_dishes(PlanningState(start_date="2024-03-04", seed="family"))
    state = t.set_cook_availability(state, "B", "mon", False, week_index=0)
    return t.fill(state)


@pytest.fixture
def local(tmp_path):
    return LocalStore(tmp_path / "local_store.json")


def _unreachable_client():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Client(transport=httpx.MockTransport(handler))


def _status_client(status):
    return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(status)))


def test_local_round_trip(planned_state, local):
    repo = StateRepository(local=local)
    assert repo.load() is None
    assert repo.save(planned_state) is True
    assert repo.load() == planned_state
    assert json.loads(local.get_item(AUTOSAVE_KEY))["seed"] == "family"


def test_remote_round_trip(planned_state, local, tmp_path, monkeypatch):
    monkeypatch.setattr(state_routes, "BLOB_FILE", str(tmp_path / "remote" / "state.json"))
    remote = RemoteStateClient("http://testserver", client=TestClient(app))
    repo = StateRepository(remote=remote, local=local)
    assert repo.load() is None  # remote serves null, local is empty
    assert repo.save(planned_state) is True
    assert local.get_item(AUTOSAVE_KEY) is None  # remote took the write
    assert repo.load() == planned_state


def test_unreachable_remote_falls_back_to_local(planned_state, local):
    repo = StateRepository(remote=RemoteStateClient("http://offline.invalid", client=_unreachable_client()),
                           local=local)
    assert repo.save(planned_state) is True
    assert local.get_item(AUTOSAVE_KEY) is not None
    assert repo.load() == planned_state


def test_remote_error_status_falls_back(planned_state, local):
    repo = StateRepository(remote=RemoteStateClient("http://broken", client=_status_client(500)), local=local)
    assert repo.save(planned_state) is True
    assert repo.load() == planned_state


def test_remote_empty_uses_local(planned_state, local, tmp_path, monkeypatch):
    monkeypatch.setattr(state_routes, "BLOB_FILE", str(tmp_path / "state.json"))
    local.set_item(AUTOSAVE_KEY, json.dumps(planned_state.to_dict()))
    repo = StateRepository(remote=RemoteStateClient("http://testserver", client=TestClient(app)), local=local)
    assert repo.load() == planned_state


def test_unparsable_local_reads_as_nothing(local):
    local.set_item(AUTOSAVE_KEY, "{not json")
    assert StateRepository(local=local).load() is None


def test_corrupt_local_file_reads_as_empty(tmp_path):
    path = tmp_path / "local_store.json"
    path.write_text("garbage", encoding="utf-8")
    store = LocalStore(path)
    assert store.get_item(AUTOSAVE_KEY) is None
    store.set_item("k", "v")
    assert store.get_item("k") == "v"
    store.remove_item("k")
    assert store.get_item("k") is None


def test_build_repository_remote_only_with_base(local):
    assert not build_repository("", local=local).has_remote
    assert build_repository("http://example.test", local=local).has_remote


def _grid_of(cell):
    return [[dict(cell) for _ in range(7)] for _ in range(4)]


@pytest.mark.parametrize("document", [
    {"cooks": [{"code": "A", "availability": ["mon"]}]},
    {"cooks": [{"code": "A", "week_overrides": {"0": ["mon"]}}]},
    {"cooks": [{"code": "A", "week_overrides": ["mon"]}]},
    {"weeks": _grid_of({"label": "Monday", "meals": ["x"]})},
    {"weeks": _grid_of({"label": "Monday", "meals": {"dinner": "Tacos"}})},
])
def test_wrong_shapes_load_without_raising(local, document):
    local.set_item(AUTOSAVE_KEY, json.dumps(document))
    state = StateRepository(local=local).load()
    assert isinstance(state, PlanningState)
    assert all(flag for c in state.cooks for flag in c.availability.values())
    assert all(c.week_overrides == {} for c in state.cooks)
    assert state.grid.is_empty()


@pytest.mark.parametrize("document", [
    {"dishes": 5},
    {"weeks": _grid_of({"date": "tomorrow-ish"})},
    {"repeat_cap": "many"},
])
def test_unusable_content_reads_as_nothing(local, document):
    local.set_item(AUTOSAVE_KEY, json.dumps(document))
    assert StateRepository(local=local).load() is None


def test_malformed_remote_document_never_raises(local):
    document = {"cooks": [{"code": "A", "availability": ["mon"]}], "dishes": 5}
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=document)))
    repo = StateRepository(remote=RemoteStateClient("http://remote", client=client), local=local)
    assert repo.load() is None
