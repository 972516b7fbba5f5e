from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from .config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG_RELAYS,
    DEFAULT_SOURCE,
    ProjectConfig,
    config_exists,
    load_config,
    save_config,
)
from .errors import ConfigError, CtxcnError
from .generation import GenerationProfile, generate_client
from .generator import ClientSpec, generate_client_file
from .ir import IRDocument, PeerContext, build_ir
from .loader import load_tool_list

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="ctxcn", description="Generate typed Python clients for remote tool servers.")
    parser.add_argument("--python-version", default="3.10", help="Target Python version (e.g. 3.10)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (defaults to $LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--cwd", type=Path, default=Path("."), help="Project root directory")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help=f"Create {CONFIG_FILENAME}")
    init_parser.add_argument("--source", default=DEFAULT_SOURCE, help="Output directory for generated clients")
    init_parser.add_argument("--relay", dest="relays", action="append", help="Relay URL (repeatable)")
    init_parser.add_argument("--private-key", help="Default private key embedded into generated clients")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing configuration")

    add_parser = subparsers.add_parser("add", help="Generate a client for a server")
    _add_client_arguments(add_parser)
    add_parser.add_argument(
        "--print", dest="print_only", action="store_true", help="Print the module instead of writing it"
    )

    update_parser = subparsers.add_parser("update", help="Regenerate the client of an added server")
    _add_client_arguments(update_parser)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "init":
            return _init(args)
        return asyncio.run(_generate(args, update=args.command == "update"))
    except CtxcnError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _add_client_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pubkey", help="Public key of the server")
    parser.add_argument("--tools", required=True, help="Tool list document (JSON/YAML path or URL)")
    parser.add_argument("-n", "--name", help="Client name (defaults to the server name)")


def _init(args: argparse.Namespace) -> int:
    if config_exists(args.cwd) and not args.force:
        raise ConfigError(f"{CONFIG_FILENAME} already exists; use --force to overwrite it")
    config = ProjectConfig(
        source=args.source,
        relays=list(args.relays or DEFAULT_CONFIG_RELAYS),
        private_key=args.private_key,
    )
    path = save_config(args.cwd, config)
    (args.cwd / config.source).mkdir(parents=True, exist_ok=True)
    print(f"Created {path}")
    return 0


async def _generate(args: argparse.Namespace, *, update: bool) -> int:
    if not config_exists(args.cwd):
        raise ConfigError(f"{CONFIG_FILENAME} not found; run 'ctxcn init' first")
    config = load_config(args.cwd)
    if update and args.pubkey not in config.added_clients:
        raise ConfigError(f"No client has been added for {args.pubkey}")
    if not update and args.pubkey in config.added_clients:
        logger.warning("A client for %s was already added; regenerating it", args.pubkey)

    ir = build_ir(load_tool_list(args.tools))
    server_name = args.name or ir.server.name or "UnknownServer"
    peer = PeerContext(
        peer_identity=args.pubkey,
        credential=config.private_key,
        endpoints=config.relays,
    )
    profile = GenerationProfile.from_version(args.python_version)

    if getattr(args, "print_only", False):
        output = await generate_client(ir.tools, server_name, peer, profile)
        sys.stdout.write(output.code)
        return 0

    _describe(ir, server_name)
    spec = ClientSpec(server_name=server_name, output_dir=args.cwd / config.source)
    path = await generate_client_file(spec, ir, peer, profile)
    if args.pubkey not in config.added_clients:
        config.added_clients.append(args.pubkey)
        save_config(args.cwd, config)
    print(f"Generated client for {server_name} at {path}")
    return 0


def _describe(ir: IRDocument, server_name: str) -> None:
    logger.info("Server %s (version %s), %d tools", server_name, ir.server.version or "unknown", len(ir.tools))
    for tool in ir.tools:
        logger.info("  %s: %s", tool.name, tool.description or "No description")


if __name__ == "__main__":
    raise SystemExit(main())
