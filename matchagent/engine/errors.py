"""Error types raised by the agent protocol layer."""

from typing import Optional


class AgentError(RuntimeError):
    """Base class for every protocol error of the agent"""


class DecodeError(AgentError):
    """Inbound think body could not be turned into a WorldState"""


class EncodeError(AgentError):
    """Decider output could not be serialized"""


class AddressError(AgentError):
    """Coordinator base address is not a usable URL"""


class TransportError(AgentError):
    """Outbound call to the coordinator did not complete"""


class ProtocolError(AgentError):
    """Coordinator answered with an unexpected status code"""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"expected HTTP 200 - OK, got {status_code}")
