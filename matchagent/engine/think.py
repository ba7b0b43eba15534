"""
Per-tick think exchange.

Decodes the coordinator's world state, asks the decider once and returns the
serialized answer. The answer is fully serialized before anything is sent,
so a serialization failure turns into an error response instead of a
truncated success.
"""

import json
from typing import Any, Union

from ..models.decider import Decider
from ..models.models import CommandSet, WorldState
from .errors import DecodeError, EncodeError


def decode_world_state(body: Union[bytes, str]) -> WorldState:
    """
    Decode a think request body.

    Raises:
        DecodeError: If the body is not a JSON object of the agreed shape
    """
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        payload = json.loads(body)
        return WorldState.from_dict(payload)
    except (UnicodeDecodeError, TypeError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        raise DecodeError(f"malformed world state: {e}") from e


def encode_commands(commands: Any) -> str:
    """
    Serialize a decider answer to JSON text.

    Raises:
        EncodeError: If the answer is not JSON-serializable
    """
    if isinstance(commands, CommandSet):
        commands = commands.to_dict()
    try:
        return json.dumps(commands, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"could not encode commands: {e}") from e


class ThinkDispatcher:
    """Runs one think exchange per call; keeps nothing between ticks"""

    def __init__(self, decider: Decider):
        self.decider = decider

    def dispatch(self, body: Union[bytes, str]) -> str:
        state = decode_world_state(body)
        commands = self.decider.decide(state)

        try:
            return encode_commands(commands)
        except EncodeError as e:
            raise EncodeError(f"{self.decider.name} answer for tick {state.tick}: {e}") from e
