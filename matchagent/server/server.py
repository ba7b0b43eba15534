"""
HTTP surface and process runner of the match agent.

``AgentServer`` wires the protocol engine to one decider; ``create_app``
turns its route table into a Flask application and ``run_agent`` serves that
application until the shutdown signal fires.
"""

import threading
import time
from typing import Optional, Tuple

from flask import Flask, Response
from werkzeug.serving import BaseWSGIServer, make_server

from ..engine.errors import AgentError
from ..engine.join import JoinNegotiator
from ..engine.lifecycle import LifecycleController, ShutdownSignal
from ..engine.session import SessionState
from ..engine.think import ThinkDispatcher
from ..models.decider import Decider
from ..utils.logger_config import get_logger
from .routes import Route, build_routes

logger = get_logger("server")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, PUT, OPTIONS",
}


class AgentServer:
    """A match agent: fixed addresses, one decider, one shutdown signal"""

    def __init__(
        self,
        decider: Decider,
        remote_root: str,
        local_root: str,
        signal: Optional[ShutdownSignal] = None,
        join_timeout: Optional[float] = None,
    ):
        """
        Args:
            decider: Decision component asked on every think request
            remote_root: Coordinator base address
            local_root: Address the coordinator uses to reach this agent
            signal: Shutdown signal owned by the caller (a new one if omitted)
            join_timeout: Optional bound on the join request
        """
        self.decider = decider
        self.session = SessionState(local_root=local_root, remote_root=remote_root)
        self.signal = signal or ShutdownSignal()
        self.negotiator = JoinNegotiator(self.session, timeout=join_timeout)
        self.dispatcher = ThinkDispatcher(decider)
        self.lifecycle = LifecycleController(self.signal)

    def join(self, match: str) -> None:
        self.negotiator.join(match)

    def routes(self) -> Tuple[Route, ...]:
        return build_routes(self)

    def create_app(self) -> Flask:
        return create_app(self)


def _error_response(exc: Exception) -> Response:
    return Response(str(exc), status=500, mimetype="text/plain")


def _make_handler(route: Route, lifecycle: LifecycleController):
    def handler() -> Response:
        lifecycle.touch()
        try:
            return route.handler()
        except AgentError as exc:
            logger.warning(f"{route.method} {route.path} failed: {exc}")
            return _error_response(exc)
        except Exception as exc:
            logger.error(f"{route.method} {route.path} failed: {exc}", exc_info=True)
            return _error_response(exc)

    handler.__name__ = route.endpoint
    return handler


def create_app(agent: AgentServer) -> Flask:
    """Create the Flask application serving an agent's route table."""
    app = Flask(__name__)

    for route in agent.routes():
        app.add_url_rule(
            route.path,
            endpoint=route.endpoint,
            view_func=_make_handler(route, agent.lifecycle),
            methods=[route.method],
        )

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    return app


def serve_in_background(app: Flask, host: str, port: int) -> Tuple[BaseWSGIServer, threading.Thread]:
    """
    Start a threaded WSGI server for ``app`` on a daemon thread.

    Port 0 picks a free port; read it back from ``server.server_port``.
    """
    server = make_server(host, port, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, name=f"http-{server.server_port}", daemon=True)
    thread.start()
    return server, thread


def run_agent(
    agent: AgentServer,
    host: str = "0.0.0.0",
    port: int = 9000,
    match: Optional[str] = None,
    shutdown_grace: float = 0.5,
    poll_interval: float = 0.5,
) -> int:
    """
    Serve an agent until an end request fires its shutdown signal.

    Args:
        agent: Agent to serve
        host: Host address to bind to
        port: Port number to bind to
        match: If given, join this match once the server is listening
        shutdown_grace: Seconds to keep serving after the signal fires so the
            end response reaches the coordinator
        poll_interval: Seconds between checks of the signal

    Returns:
        Process exit code: 0 after a normal end, 1 if the join failed
    """
    server, thread = serve_in_background(create_app(agent), host, port)
    logger.info(f"Agent listening on {host}:{server.server_port} as {agent.session.local_root}")

    exit_code = 0
    try:
        if match:
            try:
                agent.join(match)
            except (AgentError, ValueError) as e:
                logger.error(f"Failed to join match {match}: {e}")
                exit_code = 1

        if exit_code == 0:
            while not agent.signal.wait(poll_interval):
                pass
            time.sleep(shutdown_grace)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down agent")
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
        logger.info("Agent stopped")

    return exit_code
