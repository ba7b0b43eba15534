from dataclasses import dataclass


@dataclass(frozen=True)
class SessionState:
    """Addresses fixed at process start.

    ``local_root`` is where the coordinator reaches this agent;
    ``remote_root`` is the coordinator's base address.
    """

    local_root: str
    remote_root: str
