#!/usr/bin/env python3
"""
Command-line interface for the iurl redirect registry.

Talks to the configured store directly (same environment variables as app.py).

Usage:
    python iurl_cli.py register <short_path> <url> --owner UID [--label TEXT]
    python iurl_cli.py check <short_path>
    python iurl_cli.py resolve <short_path>
    python iurl_cli.py info <short_path>
    python iurl_cli.py health
    python iurl_cli.py token <uid>
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config, load_config
from iurl.errors import RegistryError
from iurl.identity import CallerIdentity, JWTIdentityProvider
from iurl.registry import RedirectRegistry
from iurl.storage import create_store
from iurl.common.logging_config import setup_logging


def _print_error(message: str, code: Optional[str] = None) -> int:
    payload = {"success": False, "error": message}
    if code:
        payload["code"] = code
    print(json.dumps(payload, indent=2), file=sys.stderr)
    return 1


class IurlCLI:
    """Command-line interface for the redirect registry."""

    def __init__(self, config: Config, verbose: bool = False):
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.registry: Optional[RedirectRegistry] = None

    async def initialize(self):
        store = create_store(self.config, logger=self.logger.getChild("storage"))
        self.registry = RedirectRegistry(
            store=store,
            logger=self.logger.getChild("registry"),
            operation_timeout_seconds=self.config.operation_timeout_seconds,
            validate_destination_urls=self.config.validate_destination_urls,
        )

    async def cleanup(self):
        if self.registry:
            await self.registry.close()

    async def register(self, short_path: str, url: str, owner: str, label: Optional[str]):
        try:
            result = await self.registry.register(
                short_path, url, CallerIdentity(uid=owner), label=label
            )
        except RegistryError as e:
            return _print_error(e.message, e.code)

        print(json.dumps({
            "success": result.success,
            "shortPath": result.short_path,
            "message": result.message,
        }, indent=2))
        return 0

    async def check(self, short_path: str):
        try:
            result = await self.registry.check_availability(short_path)
        except RegistryError as e:
            return _print_error(e.message, e.code)

        print(json.dumps({"exists": result.exists}, indent=2))
        return 0

    async def resolve(self, short_path: str):
        """Resolve like a visitor would; counts as an access."""
        try:
            destination = await self.registry.resolve(short_path)
        except RegistryError as e:
            return _print_error(e.message, e.code)

        if destination is None:
            return _print_error(f"Short path '{short_path}' not found", "not-found")

        print(json.dumps({"success": True, "shortPath": short_path, "originalUrl": destination}, indent=2))
        return 0

    async def info(self, short_path: str):
        try:
            record = await self.registry.get_record(short_path)
        except RegistryError as e:
            return _print_error(e.message, e.code)

        if record is None:
            return _print_error(f"Short path '{short_path}' not found", "not-found")

        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def health(self):
        healthy = await self.registry.health_check()
        print(json.dumps({"success": healthy, "storage": "healthy" if healthy else "unhealthy"}, indent=2))
        return 0 if healthy else 1


def issue_token(config: Config, uid: str) -> int:
    """Print a bearer token for ``uid`` signed with AUTH_JWT_SECRET."""
    if not config.auth_jwt_secret:
        return _print_error("AUTH_JWT_SECRET is not set")
    provider = JWTIdentityProvider(
        secret=config.auth_jwt_secret,
        algorithms=config.auth_jwt_algorithms,
        audience=config.auth_jwt_audience,
    )
    print(provider.issue(uid))
    return 0


async def main():
    parser = argparse.ArgumentParser(
        description="iurl redirect registry CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Claim a short path
  %(prog)s register launch https://example.com/launch --owner alice --label "Launch post"

  # Is it taken?
  %(prog)s check launch

  # Show destination and access count
  %(prog)s info launch

  # Mint a bearer token for API calls
  %(prog)s token alice
        """
    )

    parser.add_argument(
        "--backend",
        choices=["postgres", "redis", "memory"],
        help="Storage backend (default: from STORAGE_BACKEND env)"
    )
    parser.add_argument(
        "--db-url",
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )
    parser.add_argument(
        "--redis-url",
        help="Redis connection URL (default: from REDIS_URL env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    register_parser = subparsers.add_parser("register", help="Claim a short path")
    register_parser.add_argument("short_path", help="Short path to claim")
    register_parser.add_argument("url", help="Destination URL")
    register_parser.add_argument("--owner", required=True, help="Owner id recorded on the redirect")
    register_parser.add_argument("--label", help="Optional label")

    check_parser = subparsers.add_parser("check", help="Check whether a short path exists")
    check_parser.add_argument("short_path")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short path (counts an access)")
    resolve_parser.add_argument("short_path")

    info_parser = subparsers.add_parser("info", help="Show a redirect record")
    info_parser.add_argument("short_path")

    subparsers.add_parser("health", help="Check storage health")

    token_parser = subparsers.add_parser("token", help="Issue a bearer token")
    token_parser.add_argument("uid", help="Caller id to embed as the token subject")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    overrides = {}
    if args.backend:
        overrides["storage_backend"] = args.backend
    if args.db_url:
        overrides["database_url"] = args.db_url
    if args.redis_url:
        overrides["redis_url"] = args.redis_url
    config = load_config().model_copy(update=overrides)

    if args.command == "token":
        return issue_token(config, args.uid)

    cli = IurlCLI(config=config, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "register":
            return await cli.register(args.short_path, args.url, args.owner, args.label)
        elif args.command == "check":
            return await cli.check(args.short_path)
        elif args.command == "resolve":
            return await cli.resolve(args.short_path)
        elif args.command == "info":
            return await cli.info(args.short_path)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
