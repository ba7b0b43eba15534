"""
Main entry point for matchagent.

``serve`` runs the agent's HTTP server until the coordinator ends the match,
optionally joining a match first; ``join`` performs a single join handshake.
"""

import argparse
import os
import sys
from datetime import datetime
from typing import List, Optional

from .engine.errors import AgentError
from .models.decider import load_decider
from .server.server import AgentServer, run_agent
from .utils.config_manager import ConfigManager, get_config
from .utils.logger_config import get_logger, setup_logging


def setup_logging_from_config(config: ConfigManager, command: str) -> None:
    """Setup logging based on configuration"""
    log_config = config.get_section("log")

    log_dir = log_config.get("dir")
    log_filename = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        port = config.get("server.port", 9000)
        log_filename = os.path.join(log_dir, f"{command}_{port}_{timestamp}.log")

    setup_logging(
        level=log_config.get("level", "INFO"),
        log_file=log_filename,
        enable_colors=log_config.get("enable_colors", True)
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='matchagent - networked agent for match coordinators')
    parser.add_argument('--config', default='config/agent_config.json',
                        help='Path to agent configuration file')
    parser.add_argument('--log-level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override log level')
    parser.add_argument('--log-dir', help='Override log directory')
    parser.add_argument('--remote-root', help='Coordinator base address, e.g. http://coord:8000')
    parser.add_argument('--local-root', help='Address the coordinator uses to reach this agent')
    parser.add_argument('--join-timeout', type=float, help='Timeout in seconds for the join request')

    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Serve the agent until the match ends')
    serve.add_argument('--host', help='Host to bind the agent server')
    serve.add_argument('--port', type=int, help='Port to bind the agent server')
    serve.add_argument('--match', help='Join this match once the server is up')
    serve.add_argument('--decider', help='Decider to use, as package.module:ClassName')
    serve.add_argument('--shutdown-grace', type=float,
                       help='Seconds to keep serving after an end request')

    join = subparsers.add_parser('join', help='Join a match and exit')
    join.add_argument('--match', required=True, help='Identifier of the match to join')

    return parser


def apply_overrides(config: ConfigManager, args: argparse.Namespace) -> None:
    """Override configuration with command line arguments"""
    overrides = {
        "log.level": args.log_level,
        "log.dir": args.log_dir,
        "agent.remote_root": args.remote_root,
        "agent.local_root": args.local_root,
        "agent.join_timeout": args.join_timeout,
        "agent.match": getattr(args, "match", None),
        "agent.decider": getattr(args, "decider", None),
        "server.host": getattr(args, "host", None),
        "server.port": getattr(args, "port", None),
        "server.shutdown_grace": getattr(args, "shutdown_grace", None),
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)


def build_agent(config: ConfigManager) -> AgentServer:
    decider = load_decider(config.get_str("agent.decider", "matchagent.models.decider:IdleDecider"))
    return AgentServer(
        decider=decider,
        remote_root=config.get_str("agent.remote_root"),
        local_root=config.get_str("agent.local_root"),
        join_timeout=config.get("agent.join_timeout"),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the matchagent CLI"""
    args = build_parser().parse_args(argv)

    config = get_config(args.config)
    apply_overrides(config, args)

    setup_logging_from_config(config, args.command)
    logger = get_logger("main")
    logger.info(f"Configuration loaded from: {config.config_path}")

    try:
        agent = build_agent(config)
    except (ImportError, ValueError) as e:
        logger.error(f"Could not build agent: {e}")
        return 1

    if args.command == 'join':
        try:
            agent.join(config.get_str("agent.match"))
        except (AgentError, ValueError) as e:
            logger.error(f"Join failed: {e}")
            return 1
        return 0

    host = config.get_str("server.host", "0.0.0.0")
    port = int(config.get("server.port", 9000))
    logger.info(f"Starting agent with {agent.decider.name} on {host}:{port}")
    return run_agent(
        agent,
        host=host,
        port=port,
        match=config.get_str("agent.match"),
        shutdown_grace=float(config.get("server.shutdown_grace", 0.5)),
    )


if __name__ == "__main__":
    sys.exit(main())
