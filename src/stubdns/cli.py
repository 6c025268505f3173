"""CLI for querying a YAML zone file."""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from .config import ZoneConfig
from .errors import ResolverError
from .resolver import TableResolver

logger = logging.getLogger(__name__)

# Lookup kind -> (argument names, call returning printable lines).
QUERIES: dict[str, tuple[tuple[str, ...], Callable[..., list[str]]]] = {
    "addr": (("address",), lambda r, a: r.lookup_addr(a)),
    "cname": (("host",), lambda r, h: [r.lookup_cname(h)]),
    "host": (("host",), lambda r, h: r.lookup_host(h)),
    "ip": (("host",), lambda r, h: [str(ip) for ip in r.lookup_ip_addr(h)]),
    "mx": (("name",), lambda r, n: [f"{mx.preference} {mx.host}" for mx in r.lookup_mx(n)]),
    "ns": (("name",), lambda r, n: [ns.host for ns in r.lookup_ns(n)]),
    "srv": (
        ("service", "proto", "name"),
        lambda r, s, p, n: [
            f"{srv.priority} {srv.weight} {srv.port} {srv.target}"
            for srv in r.lookup_srv(s, p, n)
        ],
    ),
    "txt": (("name",), lambda r, n: r.lookup_txt(n)),
    "port": (("network", "service"), lambda r, net, s: [str(r.lookup_port(net, s))]),
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed CLI options:
            - config (str): Path to YAML zone file.
            - skip_cname (bool): Disable alias chasing.
            - log_level (str): Logging level.
            - kind (str): Lookup to perform, plus its positional arguments.
    """
    parser = argparse.ArgumentParser(
        description="Query a static DNS zone table (YAML-backed)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", default="zones.yaml", help="Path to YAML zone file")
    parser.add_argument(
        "--skip-cname",
        action="store_true",
        help="Do not follow CNAME records (overrides the zone file when set)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    sub = parser.add_subparsers(dest="kind", required=True, metavar="KIND")
    for kind, (params, _) in QUERIES.items():
        p = sub.add_parser(kind, help=f"{kind} lookup")
        for param in params:
            p.add_argument(param)
    return parser.parse_args(argv)


def run_query(resolver: TableResolver, args: argparse.Namespace) -> list[str]:
    """Run the lookup selected by `args` and format the results.

    Raises:
        ResolverError: Whatever the lookup raises.
    """
    params, call = QUERIES[args.kind]
    return call(resolver, *(getattr(args, p) for p in params))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI entry point.

    Loads the zone file, performs one lookup and prints one result per line.

    Returns:
        int: 0 on success, 1 if the lookup failed, 2 if the zone file is
        unusable.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ZoneConfig(args.config)
    except (ValueError, OSError) as exc:
        logger.error("cannot load zone file %s: %s", args.config, exc)
        return 2

    resolver = config.resolver(skip_cname=True if args.skip_cname else None)

    try:
        lines = run_query(resolver, args)
    except ResolverError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0
