from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class AgentPhase(str, Enum):
    CREATED = "created"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"


@dataclass(frozen=True)
class JoinRequest:
    """Body of the outbound join handshake"""
    endpoint: str
    match: str

    def to_dict(self) -> Dict[str, str]:
        return {"endpoint": self.endpoint, "match": self.match}


@dataclass
class WorldState:
    """
    Snapshot of the match at one tick, as sent by the coordinator.

    Only ``tick`` is interpreted here; every field of the document is kept
    in ``data`` for the decider to read.
    """
    data: Dict[str, Any] = field(default_factory=dict)
    tick: Optional[int] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    @classmethod
    def from_dict(cls, payload: Any) -> "WorldState":
        """Build a WorldState from a decoded JSON document.

        Raises:
            TypeError: if the document is not an object
            ValueError: if ``tick`` is present but not an integer
        """
        if not isinstance(payload, dict):
            raise TypeError(f"world state must be a JSON object, got {type(payload).__name__}")
        tick = payload.get("tick")
        # bool is an int subclass but never a valid tick
        if tick is not None and (isinstance(tick, bool) or not isinstance(tick, int)):
            raise ValueError(f"tick must be an integer, got {tick!r}")
        return cls(data=dict(payload), tick=tick)


@dataclass
class CommandSet:
    """The decider's answer for one tick"""
    commands: List[Dict[str, Any]] = field(default_factory=list)
    tick: Optional[int] = None

    def add(self, action: str, **params: Any) -> "CommandSet":
        command = {"action": action}
        command.update(params)
        self.commands.append(command)
        return self

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"commands": list(self.commands)}
        if self.tick is not None:
            result["tick"] = self.tick
        return result

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CommandSet":
        commands = payload.get("commands", [])
        if not isinstance(commands, list):
            raise ValueError("commands must be a list")
        return cls(commands=list(commands), tick=payload.get("tick"))
