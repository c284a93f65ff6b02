"""
CLI entry point for dynamo-fixtures.

Provides commands for running a standalone local DynamoDB server and for
checking that a remote credentials profile can be loaded.
"""

import argparse
import logging
import sys
import threading

from .config import Settings, configure_logging
from .exceptions import ProvisioningError
from .ports import find_available_port
from .provisioners import RemoteProvisioner
from .server import LocalDynamoServer, LocalServerConfig

logger = logging.getLogger(__name__)


def serve(args, settings: Settings) -> int:
    """Run a local in-memory server until interrupted."""
    host = args.host or settings.host
    port = args.port or find_available_port(host)
    server = LocalDynamoServer(port, LocalServerConfig(host=host, region_name=settings.region_name))
    try:
        server.start()
    except Exception as e:
        print(f"Local DynamoDB server failed to start: {e}", file=sys.stderr)
        return 1

    print(f"Local DynamoDB listening at {server.endpoint_url}")
    print("Press Ctrl+C to stop")
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()
    return 0


def check_profile(args, settings: Settings) -> int:
    """Try to acquire a remote provisioner with the given profile."""
    provisioner = RemoteProvisioner(
        credentials_file=args.credentials_file,
        profile_name=args.profile,
        settings=settings,
    )
    try:
        handle = provisioner.acquire()
    except ProvisioningError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        return 1

    print(f"✓ Profile {provisioner.profile_name!r} loaded")
    print(f"✓ Endpoint: {handle.endpoint_url}")
    provisioner.release()
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="DynamoDB test environment utilities",
        prog="python -m dynamo_fixtures"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run a local in-memory DynamoDB server"
    )
    serve_parser.add_argument("--host", default=None, help="Interface to bind (default: DYNAMO_FIXTURES_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind (default: any free port)")

    profile_parser = subparsers.add_parser(
        "check-profile",
        help="Check that a credentials profile loads and yields a DynamoDB client"
    )
    profile_parser.add_argument("--credentials-file", default=None, help="Shared credentials file")
    profile_parser.add_argument("--profile", default=None, help="Profile name")

    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args.command == "serve":
        sys.exit(serve(args, settings))
    elif args.command == "check-profile":
        sys.exit(check_profile(args, settings))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
