"""
Decision interface for the match agent.

The protocol layer only ever talks to a Decider: it hands over the decoded
world state of one tick and serializes whatever comes back. Strategy code
lives entirely behind this interface.
"""

import importlib
from abc import ABC, abstractmethod
from typing import Any

from .models import CommandSet, WorldState


class Decider(ABC):
    """
    Abstract interface for decision components.

    ``decide`` is called synchronously from the request thread, once per
    think request, possibly from several threads at the same time.
    """

    @property
    def name(self) -> str:
        """Get the decider name"""
        return type(self).__name__

    @abstractmethod
    def decide(self, state: WorldState) -> Any:
        """
        Compute the commands for one tick.

        Args:
            state: World state of the current tick

        Returns:
            A CommandSet, or any JSON-serializable value
        """
        pass


class IdleDecider(Decider):
    """Decider that never issues a command"""

    def decide(self, state: WorldState) -> CommandSet:
        return CommandSet(tick=state.tick)


def load_decider(path: str) -> Decider:
    """
    Instantiate a decider from a ``package.module:ClassName`` path.

    Raises:
        ValueError: if the path is malformed or does not name a Decider
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Decider path must look like 'package.module:ClassName', got {path!r}")

    module = importlib.import_module(module_name)
    try:
        factory = getattr(module, attr)
    except AttributeError:
        raise ValueError(f"Module {module_name} has no attribute {attr}") from None

    decider = factory()
    if not isinstance(decider, Decider):
        raise ValueError(f"{path} does not produce a Decider")
    return decider
