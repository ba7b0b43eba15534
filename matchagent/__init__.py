"""
matchagent - networked agent for match coordinators

Joins a match on a remote coordinator, answers its per-tick think requests
through a pluggable decider and stops when the coordinator ends the match.
"""

from .models.models import AgentPhase, CommandSet, JoinRequest, WorldState
from .models.decider import Decider, IdleDecider
from .engine.errors import AddressError, AgentError, DecodeError, EncodeError, ProtocolError, TransportError
from .engine.lifecycle import ShutdownSignal
from .server.server import AgentServer, create_app, run_agent

__version__ = "0.1.0"
__all__ = [
    "AgentPhase", "CommandSet", "JoinRequest", "WorldState",
    "Decider", "IdleDecider",
    "AddressError", "AgentError", "DecodeError", "EncodeError", "ProtocolError", "TransportError",
    "ShutdownSignal",
    "AgentServer", "create_app", "run_agent",
]
