"""Declarative route table of the agent's inbound HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, NamedTuple, Tuple

from flask import Response, request

if TYPE_CHECKING:
    from .server import AgentServer


class Route(NamedTuple):
    method: str
    path: str
    handler: Callable[[], Response]

    @property
    def endpoint(self) -> str:
        return f"{self.method.lower()}_{self.path.strip('/') or 'root'}"


def _empty_ok() -> Response:
    return Response(status=200)


def build_routes(agent: "AgentServer") -> Tuple[Route, ...]:
    """Build the route table for one agent."""

    def status() -> Response:
        agent.lifecycle.status()
        return _empty_ok()

    def start() -> Response:
        agent.lifecycle.start()
        return _empty_ok()

    def end() -> Response:
        agent.lifecycle.end()
        return _empty_ok()

    def think() -> Response:
        body = agent.dispatcher.dispatch(request.get_data(cache=False))
        return Response(body, status=200, mimetype="application/json")

    return (
        Route("GET", "/status", status),
        Route("POST", "/status", status),
        Route("POST", "/start", start),
        Route("POST", "/end", end),
        Route("POST", "/think", think),
    )
