"""
Outbound join handshake.

Registers this agent's callback address with the coordinator for one match.
A single attempt is made per call; retry policy belongs to the caller.
"""

from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from ..models.models import JoinRequest
from ..utils.logger_config import get_logger
from .errors import AddressError, ProtocolError, TransportError
from .session import SessionState

logger = get_logger("join")

JOIN_PATH = "join"


def build_join_url(remote_root: str) -> str:
    """
    Append the join segment to the coordinator base address.

    Args:
        remote_root: Coordinator base URL, e.g. "http://coord:8000"

    Returns:
        Absolute URL of the join endpoint

    Raises:
        AddressError: If the base address cannot be parsed
    """
    if not isinstance(remote_root, str) or not remote_root.strip():
        raise AddressError("coordinator address is empty")

    try:
        parts = urlsplit(remote_root.strip())
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise AddressError(f"invalid coordinator address {remote_root!r}: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise AddressError(f"invalid coordinator address {remote_root!r}: expected http(s)://host[:port]")

    path = parts.path.rstrip("/") + "/" + JOIN_PATH
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


class JoinNegotiator:
    """Performs the join handshake for a fixed session"""

    def __init__(self, session: SessionState, timeout: Optional[float] = None):
        """
        Args:
            session: Addresses of this agent and of the coordinator
            timeout: Optional bound on the outbound call; None leaves it to
                the transport
        """
        self.session = session
        self.timeout = timeout

    def join(self, match: str) -> None:
        """
        Ask the coordinator to add this agent to a match.

        Args:
            match: Identifier of the match to join

        Raises:
            ValueError: If the match identifier is empty
            AddressError: If the coordinator address cannot be parsed
            TransportError: If the request could not be completed
            ProtocolError: If the coordinator does not answer 200
        """
        if not isinstance(match, str) or not match:
            raise ValueError("match identifier must be a non-empty string")

        message = JoinRequest(endpoint=self.session.local_root, match=match)
        url = build_join_url(self.session.remote_root)

        logger.info(f"Making request to {url}")
        try:
            response = requests.post(
                url,
                json=message.to_dict(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as e:
            raise AddressError(f"invalid coordinator address {url!r}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"join request to {url} failed: {e}") from e

        if response.status_code != requests.codes.ok:
            logger.warning(f"Join of match {match} rejected with HTTP {response.status_code}")
            raise ProtocolError(response.status_code)

        logger.info("OK")
