from __future__ import annotations

import logging

import pytest

from matchagent.models.models import CommandSet, JoinRequest, WorldState
from matchagent.server.routes import build_routes
from matchagent.utils.logger_config import ColoredFormatter, NoColorFormatter


def test_join_request_wire_shape() -> None:
    message = JoinRequest(endpoint="http://agent:9000", match="match-42")

    assert message.to_dict() == {"endpoint": "http://agent:9000", "match": "match-42"}


def test_world_state_requires_an_object() -> None:
    with pytest.raises(TypeError):
        WorldState.from_dict([1, 2])

    state = WorldState.from_dict({})
    assert state.tick is None
    assert state.data == {}


def test_command_set_builder() -> None:
    commands = CommandSet(tick=4).add("move", x=1, y=2).add("fire")

    assert commands.to_dict() == {
        "commands": [{"action": "move", "x": 1, "y": 2}, {"action": "fire"}],
        "tick": 4,
    }
    assert CommandSet.from_dict(commands.to_dict()) == commands


def test_command_set_rejects_non_list_commands() -> None:
    with pytest.raises(ValueError):
        CommandSet.from_dict({"commands": "fire"})


def test_route_table_matches_http_surface(agent) -> None:
    table = [(route.method, route.path) for route in build_routes(agent)]

    assert table == [
        ("GET", "/status"),
        ("POST", "/status"),
        ("POST", "/start"),
        ("POST", "/end"),
        ("POST", "/think"),
    ]
    assert len({route.endpoint for route in build_routes(agent)}) == len(table)


def test_formatters_color_only_the_console() -> None:
    record = logging.LogRecord("think", logging.ERROR, __file__, 1, "bad tick", None, None)

    colored = ColoredFormatter("%(levelname)s %(message)s").format(record)
    plain = NoColorFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[31m" in colored
    assert plain == "ERROR bad tick"
    assert record.levelname == "ERROR"
    assert record.msg == "bad tick"
