#!/usr/bin/env python3
"""
Launcher for the Uncovering History front-end service.

``--env <name>`` selects ``.env.<name>``. The choice is exported as
``ENVIRONMENT`` so the application, and any worker process uvicorn
spawns, reads the same file.
"""

import argparse
import os
import sys

from historymap.config import Environment, Settings, reload_settings
from historymap.config.loader import ConfigLoader

ENVIRONMENTS = [env.value for env in Environment]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Uncovering History map front end")

    server = parser.add_argument_group("server")
    server.add_argument("--env", choices=ENVIRONMENTS, help="Environment file to load (default: $ENVIRONMENT or .env only)")
    server.add_argument("--host", help="Bind address")
    server.add_argument("--port", type=int, help="Bind port")
    server.add_argument("--workers", type=int, help="Worker processes (ignored with --reload)")
    server.add_argument("--reload", action="store_true", help="Restart on code changes")
    server.add_argument("--debug", action="store_true", help="Run FastAPI in debug mode")

    config = parser.add_argument_group("configuration")
    config.add_argument("--list-envs", action="store_true", help="List .env.<name> files in the working directory")
    config.add_argument("--validate-env", metavar="ENV", help="Check that .env.<ENV> exists and names a backend")
    config.add_argument("--create-sample", metavar="ENV", help="Write .env.<ENV>.sample")
    return parser


def run_config_command(args: argparse.Namespace) -> int:
    """Handle the configuration commands; returns the process exit code."""
    if args.list_envs:
        for name in ConfigLoader.get_available_environments():
            print(name)
        return 0

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"{args.validate_env}: ok")
            return 0
        print(f"{args.validate_env}: missing, invalid or without BACKEND_API_URL")
        return 1

    try:
        print(ConfigLoader.create_sample_env_file(args.create_sample))
    except (ValueError, OSError) as e:
        print(f"Could not write sample for {args.create_sample}: {e}")
        return 1
    return 0


def export_environment(args: argparse.Namespace) -> Settings:
    """Publish CLI choices to the process environment and reload settings from it."""
    if args.env:
        os.environ["ENVIRONMENT"] = args.env
    if args.debug:
        os.environ["DEBUG"] = "true"
    return reload_settings()


def main() -> int:
    args = build_parser().parse_args()

    if args.list_envs or args.validate_env or args.create_sample:
        return run_config_command(args)

    try:
        settings = export_environment(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 1

    host = args.host or settings.host
    port = args.port or settings.port
    reload = args.reload or settings.reload
    workers = 1 if reload else (args.workers or settings.workers)

    print(
        f"{settings.app_name} {settings.app_version} [{settings.environment.value}] "
        f"on {host}:{port}, workers={workers}, reload={reload}"
    )
    if settings.backend.api_url:
        print(f"Backend: {settings.backend.api_url}")
    else:
        print("Backend: not configured, proxy and page routes will answer 500")

    import uvicorn

    uvicorn.run(
        "historymap.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
