from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from matchagent.engine.errors import DecodeError, EncodeError
from matchagent.engine.think import ThinkDispatcher, decode_world_state, encode_commands
from matchagent.models.decider import Decider, IdleDecider
from matchagent.models.models import CommandSet, WorldState
from matchagent.server.server import AgentServer


class StrictDecider(Decider):
    """Needs a robots list in every state."""

    def decide(self, state: WorldState) -> Any:
        return CommandSet(commands=[{"robot": robot["id"], "action": "fire"} for robot in state["robots"]])


class UnserializableDecider(Decider):
    def decide(self, state: WorldState) -> Any:
        return CommandSet(commands=[{"action": "wait", "until": object()}])


def _client_for(decider: Decider):
    agent = AgentServer(decider=decider, remote_root="http://coord:8000", local_root="http://agent:9000")
    return agent.create_app().test_client()


def test_think_returns_commands_for_well_formed_state(client, decider) -> None:
    state = {"tick": 7, "targets": [{"x": 3, "y": 4}, {"x": -1, "y": 0}]}

    response = client.post("/think", data=json.dumps(state), content_type="application/json")

    assert response.status_code == 200
    assert response.mimetype == "application/json"
    commands = CommandSet.from_dict(response.get_json())
    assert commands.tick == 7
    assert commands.commands == [
        {"action": "move", "x": 3, "y": 4},
        {"action": "move", "x": -1, "y": 0},
    ]
    assert len(decider.states) == 1
    assert decider.states[0].data == state


def test_decider_is_called_once_per_request(client, decider) -> None:
    for tick in range(3):
        assert client.post("/think", json={"tick": tick}).status_code == 200

    assert [state.tick for state in decider.states] == [0, 1, 2]


@pytest.mark.parametrize("body", [b"{", b"not json", b"[1, 2, 3]", b'"text"', b'{"tick": "soon"}', b"\xff\xfe"])
def test_malformed_state_is_rejected_and_agent_keeps_serving(client, decider, body) -> None:
    response = client.post("/think", data=body, content_type="application/json")

    assert response.status_code == 500
    assert response.mimetype == "text/plain"
    assert "malformed world state" in response.get_data(as_text=True)
    assert decider.states == []

    assert client.post("/think", json={"tick": 1}).status_code == 200
    assert client.get("/status").status_code == 200


def test_empty_state_with_idle_decider_succeeds() -> None:
    client = _client_for(IdleDecider())

    response = client.post("/think", json={})

    assert response.status_code == 200
    assert response.get_json() == {"commands": []}


def test_empty_state_with_strict_decider_fails_without_crashing() -> None:
    client = _client_for(StrictDecider())

    response = client.post("/think", json={})

    assert response.status_code == 500
    assert "robots" in response.get_data(as_text=True)

    ok = client.post("/think", json={"robots": [{"id": "r1"}]})
    assert ok.status_code == 200
    assert ok.get_json() == {"commands": [{"robot": "r1", "action": "fire"}]}


def test_unserializable_commands_never_produce_a_success_response() -> None:
    client = _client_for(UnserializableDecider())

    response = client.post("/think", json={"tick": 1})

    assert response.status_code == 500
    assert "could not encode commands" in response.get_data(as_text=True)


def test_dispatcher_accepts_plain_json_answers() -> None:
    class ListDecider(Decider):
        def decide(self, state: WorldState) -> Any:
            return [{"action": "scan"}]

    dispatcher = ThinkDispatcher(ListDecider())

    assert json.loads(dispatcher.dispatch(b"{}")) == [{"action": "scan"}]


def test_decode_world_state_keeps_every_field() -> None:
    state = decode_world_state('{"tick": 3, "robots": [{"id": "a"}], "arena": {"w": 10}}')

    assert state.tick == 3
    assert state["robots"] == [{"id": "a"}]
    assert state.get("arena") == {"w": 10}
    assert state.get("missing") is None


def test_decode_world_state_rejects_boolean_tick() -> None:
    with pytest.raises(DecodeError):
        decode_world_state(b'{"tick": true}')


def test_encode_commands_rejects_nan() -> None:
    with pytest.raises(EncodeError):
        encode_commands({"commands": [{"speed": float("nan")}]})


def test_malformed_state_is_logged_once(client, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        client.post("/think", data=b"{", content_type="application/json")

    warnings = [record for record in caplog.records if "malformed world state" in record.getMessage()]
    assert len(warnings) == 1
    assert warnings[0].name == "server"
