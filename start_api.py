#!/usr/bin/env python3
"""
Startup script for the Events API server.

Usage:
    python start_api.py              # Development mode
    python start_api.py --prod       # Production mode
    python start_api.py --port 8080  # Custom port
"""

import argparse
import os
import uvicorn


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Start the Events API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8001, help="Port to bind to (default: 8001)")
    parser.add_argument(
        "--prod",
        action="store_true",
        help="Run in production mode (no auto-reload, several workers)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Number of worker processes (default: 1)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload in development mode")
    return parser.parse_args(argv)


def uvicorn_options(args) -> dict:
    """Build the ``uvicorn.run`` keyword arguments for ``args``."""
    options = {
        "app": "api.main:app",
        "host": args.host,
        "port": args.port,
        "loop": "asyncio",
        "http": "h11",
    }
    if args.prod:
        # Each worker keeps its own page cache.
        options.update({"workers": args.workers, "log_level": "info"})
    else:
        options["log_level"] = "debug"
        if not args.no_reload:
            options.update({
                "reload": True,
                "reload_dirs": ["api", "events"],
                "reload_delay": 1.0,
            })
    return options


def main():
    """Start the FastAPI server with configurable options."""
    os.environ.setdefault("WATCHFILES_FORCE_POLLING", "1")
    args = parse_args()
    options = uvicorn_options(args)

    mode = "PRODUCTION" if args.prod else "DEVELOPMENT"
    print(f"🚀 Starting Events API in {mode} mode")
    print(f"   📍 http://{args.host}:{args.port}")
    if args.prod:
        print(f"   👷 {args.workers} worker(s)")
    else:
        print("   🔄 Auto-reload enabled" if options.get("reload") else "   ⚡ Auto-reload disabled")
        print(f"   📚 API docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(**options)


if __name__ == "__main__":
    main()
