"""
Models package for matchagent.

Wire-level data models and the decision interface.
"""

from .models import (
    AgentPhase,
    CommandSet,
    JoinRequest,
    WorldState,
)

from .decider import Decider, IdleDecider, load_decider

__all__ = [
    # Data models
    "AgentPhase",
    "CommandSet",
    "JoinRequest",
    "WorldState",

    # Decision interface
    "Decider",
    "IdleDecider",
    "load_decider",
]
