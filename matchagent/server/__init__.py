"""
HTTP server of the match agent.

Exposes the agent's status, start, end and think endpoints and runs the
process until the coordinator ends the match.
"""

from .routes import Route, build_routes
from .server import AgentServer, create_app, run_agent, serve_in_background

__all__ = ["AgentServer", "Route", "build_routes", "create_app", "run_agent", "serve_in_background"]
