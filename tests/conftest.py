from __future__ import annotations

import logging
import threading
from typing import Any, List

import pytest

from matchagent.models.decider import Decider
from matchagent.models.models import CommandSet, WorldState
from matchagent.server.server import AgentServer
from matchagent.utils.config_manager import set_config


class RecordingDecider(Decider):
    """Moves toward the first target it is shown and records every state."""

    def __init__(self) -> None:
        self.states: List[WorldState] = []
        self._lock = threading.Lock()

    def decide(self, state: WorldState) -> Any:
        with self._lock:
            self.states.append(state)
        commands = CommandSet(tick=state.tick)
        for target in state.get("targets", []):
            commands.add("move", x=target["x"], y=target["y"])
        return commands


@pytest.fixture(autouse=True)
def reset_global_config():
    set_config(None)
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def decider() -> RecordingDecider:
    return RecordingDecider()


@pytest.fixture
def agent(decider: RecordingDecider) -> AgentServer:
    return AgentServer(decider=decider, remote_root="http://coord:8000", local_root="http://agent:9000")


@pytest.fixture
def client(agent: AgentServer):
    return agent.create_app().test_client()
