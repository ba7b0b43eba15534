"""
Protocol engine of the match agent: session addresses, the join handshake,
the think exchange and the lifecycle controller.
"""

from .errors import AddressError, AgentError, DecodeError, EncodeError, ProtocolError, TransportError
from .join import JoinNegotiator, build_join_url
from .lifecycle import LifecycleController, ShutdownSignal
from .session import SessionState
from .think import ThinkDispatcher, decode_world_state, encode_commands

__all__ = [
    "AddressError", "AgentError", "DecodeError", "EncodeError", "ProtocolError", "TransportError",
    "JoinNegotiator", "build_join_url",
    "LifecycleController", "ShutdownSignal",
    "SessionState",
    "ThinkDispatcher", "decode_world_state", "encode_commands",
]
