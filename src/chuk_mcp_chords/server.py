#!/usr/bin/env python3
"""
Entry point for the CHUK Chords MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
import random

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Chords MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the session random source for reproducible output",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Import after argument parsing to avoid issues
    from chuk_mcp_chords.async_server import mcp, session

    if args.seed is not None:
        session.rng = random.Random(args.seed)
        logger.info("Random source seeded with %d", args.seed)

    if args.transport == "stdio":
        logger.info("Starting CHUK Chords MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info("Starting CHUK Chords MCP Server (http:%d)", args.port)
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
