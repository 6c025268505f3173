"""Zone-table-backed resolver."""
from __future__ import annotations

import ipaddress
import logging
import socket
from collections.abc import Mapping
from types import MappingProxyType

from .errors import CNAMELoopError, DNSLookupError, MalformedRecordError, UnknownPortError
from .interface import IPAddress, Resolver
from .names import normalize_name, reverse_name, srv_query_name
from .records import MX, NS, SRV, ZoneRecord

logger = logging.getLogger(__name__)

# Alias hops followed before a chain is treated as a loop.
MAX_CNAME_HOPS = 8

# Networks accepted by lookup_port, mapped to the protocols tried in order.
PORT_NETWORKS: dict[str, tuple[str, ...]] = {
    "": ("tcp", "udp"),
    "tcp": ("tcp",),
    "tcp4": ("tcp",),
    "tcp6": ("tcp",),
    "udp": ("udp",),
    "udp4": ("udp",),
    "udp6": ("udp",),
}


class TableResolver(Resolver):
    """Answer lookups from a static table of zone records.

    The table is snapshotted on construction: keys are normalized and every
    record is copied, so later changes to the caller's mapping are not seen
    and results never alias the stored data. Lookups perform no I/O.

    Args:
        zones: Mapping of domain names (or reverse-lookup keys) to records.
            Keys are normalized; when two keys normalize to the same name
            the later one wins.
        skip_cname: Do not follow aliases for address, MX, NS, SRV and TXT
            lookups.
        max_cname_hops: Aliases followed before giving up.

    Attributes:
        zones: Read-only view of the normalized table.
        skip_cname: Whether alias chasing is disabled.
        max_cname_hops: Alias hop limit.
    """

    def __init__(
        self,
        zones: Mapping[str, ZoneRecord],
        skip_cname: bool = False,
        max_cname_hops: int = MAX_CNAME_HOPS,
    ) -> None:
        if max_cname_hops < 0:
            raise ValueError(f"max_cname_hops must be >= 0, got {max_cname_hops}")
        table: dict[str, ZoneRecord] = {}
        for name, record in zones.items():
            table[normalize_name(name)] = record.snapshot()
        self._zones = table
        self.skip_cname = skip_cname
        self.max_cname_hops = max_cname_hops

    @property
    def zones(self) -> Mapping[str, ZoneRecord]:
        """Read-only view of the normalized table holding detached record copies."""
        return MappingProxyType({name: rec.snapshot() for name, rec in self._zones.items()})

    def _direct(self, name: str) -> ZoneRecord:
        """Look up `name` without following aliases."""
        record = self._zones.get(normalize_name(name))
        if record is None:
            raise DNSLookupError.not_found(name)
        if record.error is not None:
            # One instance is raised on every lookup; drop state left by earlier raises.
            err = record.error
            err.__context__ = None
            raise err.with_traceback(None)
        return record

    def resolve_target(self, name: str) -> tuple[str, ZoneRecord]:
        """Find the record answering for `name`.

        Aliases are followed until a record without a CNAME is reached,
        unless `skip_cname` is set.

        Args:
            name: Domain name to resolve.

        Returns:
            Tuple of (first alias, record). The first alias is the CNAME of
            the record stored under `name` itself, empty if it has none, and
            is reported even when chasing is disabled. The record is a
            detached copy.

        Raises:
            DNSLookupError: If `name` or an alias target is missing.
            CNAMELoopError: If more than `max_cname_hops` aliases are followed.
            BaseException: The error stored on any record reached.
        """
        alias, record = self._target(name)
        return alias, record.snapshot()

    def _target(self, name: str) -> tuple[str, ZoneRecord]:
        """Like `resolve_target`, returning the stored record itself."""
        record = self._direct(name)
        alias = record.cname
        if self.skip_cname:
            return alias, record

        hops = 0
        while record.cname:
            hops += 1
            if hops > self.max_cname_hops:
                raise CNAMELoopError(name, self.max_cname_hops)
            target = record.cname
            logger.debug("following CNAME %s -> %s", name, target)
            record = self._direct(target)
        return alias, record

    def lookup_addr(self, address: str) -> list[str]:
        """Return PTR host names for `address`.

        Raises:
            MalformedAddressError: If `address` is not an IP address.
            DNSLookupError: If no record exists for the reverse key.
        """
        return list(self._direct(reverse_name(address)).ptr)

    def lookup_cname(self, host: str) -> str:
        return self._direct(host).cname

    def lookup_host(self, host: str) -> list[str]:
        """Return A then AAAA values for `host`.

        Raises:
            DNSLookupError: If the name is missing or has no addresses.
        """
        _, v4 = self._target(host)
        _, v6 = self._target(host)
        addrs = v4.a + v6.aaaa
        if not addrs:
            raise DNSLookupError.not_found(host)
        return addrs

    def lookup_ip_addr(self, host: str) -> list[IPAddress]:
        """Return the addresses of `host` parsed with `ipaddress`.

        Raises:
            MalformedRecordError: If a stored address does not parse.
        """
        parsed: list[IPAddress] = []
        for addr in self.lookup_host(host):
            try:
                parsed.append(ipaddress.ip_address(addr))
            except ValueError as exc:
                raise MalformedRecordError(host, addr) from exc
        return parsed

    def lookup_mx(self, name: str) -> list[MX]:
        _, record = self._target(name)
        return [mx.copy() for mx in record.mx]

    def lookup_ns(self, name: str) -> list[NS]:
        _, record = self._target(name)
        return [ns.copy() for ns in record.ns]

    def lookup_srv(self, service: str, proto: str, name: str) -> list[SRV]:
        _, record = self._target(srv_query_name(service, proto, name))
        return [srv.copy() for srv in record.srv]

    def lookup_txt(self, name: str) -> list[str]:
        _, record = self._target(name)
        return list(record.txt)

    def lookup_port(self, network: str, service: str) -> int:
        """Map a service name to a port using the host's services database.

        Args:
            network: ``tcp``, ``udp`` (optionally suffixed with 4 or 6), or
                empty to try tcp then udp.
            service: Service name such as ``http``, or a decimal port. Empty
                means port 0.

        Returns:
            Port number.

        Raises:
            UnknownPortError: On an unknown network or service.
        """
        protocols = PORT_NETWORKS.get(network)
        if protocols is None:
            raise UnknownPortError(network, service, "unknown network")
        if not service:
            return 0
        if service.isascii() and service.isdigit():
            port = int(service)
            if port > 65535:
                raise UnknownPortError(network, service, "invalid port")
            return port
        for proto in protocols:
            try:
                return socket.getservbyname(service.lower(), proto)
            except OSError:
                continue
        raise UnknownPortError(network, service)
