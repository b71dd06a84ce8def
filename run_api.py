#!/usr/bin/env python3
"""
Startup script for the Streetwise Routing API server.

Server options default to STREETWISE_API_HOST, STREETWISE_API_PORT and
STREETWISE_LOG_LEVEL, read after loading a local .env file so the same file
configures both the launcher and the routing service.
"""

import os
import uvicorn
import argparse

from dotenv import load_dotenv

LOG_LEVELS = ["debug", "info", "warning", "error"]


def build_parser() -> argparse.ArgumentParser:
    """Command line parser with defaults taken from the environment."""
    parser = argparse.ArgumentParser(description="Streetwise Routing API Server")
    parser.add_argument("--host", default=os.environ.get("STREETWISE_API_HOST", "0.0.0.0"),
                        help="Host to bind to")
    parser.add_argument("--port", type=int, default=int(os.environ.get("STREETWISE_API_PORT", 8000)),
                        help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--log-level", default=os.environ.get("STREETWISE_LOG_LEVEL", "info").lower(),
                        choices=LOG_LEVELS, help="Log level")
    return parser


def main(argv=None):
    """Start the FastAPI server."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    print("Starting Streetwise Routing API Server")
    print(f"URL: http://{args.host}:{args.port}")
    print(f"Documentation: http://{args.host}:{args.port}/docs")
    print(f"Health check: http://{args.host}:{args.port}/api/routing/health")
    if not os.environ.get("MAPBOX_ACCESS_TOKEN"):
        print("MAPBOX_ACCESS_TOKEN not set - route planning disabled, scoring only")
    print("-" * 50)

    # Ensure we're in the right directory
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        access_log=True
    )


if __name__ == "__main__":
    main()
