"""Lookup operations shared by every resolver implementation."""
from __future__ import annotations

import abc
import ipaddress

from .records import MX, NS, SRV

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class Resolver(abc.ABC):
    """Capability set of a DNS resolver.

    Code that performs lookups should depend on this class so a
    table-backed stub and a network-backed resolver are interchangeable.
    Failures are reported by raising `stubdns.errors.ResolverError`
    subclasses; a missing name raises `DNSLookupError` with
    ``is_not_found`` set.
    """

    @abc.abstractmethod
    def lookup_addr(self, address: str) -> list[str]:
        """Return the host names pointing back at `address`."""

    @abc.abstractmethod
    def lookup_cname(self, host: str) -> str:
        """Return the alias target of `host`, empty if it is not an alias."""

    @abc.abstractmethod
    def lookup_host(self, host: str) -> list[str]:
        """Return IPv4 then IPv6 addresses of `host` as strings."""

    @abc.abstractmethod
    def lookup_ip_addr(self, host: str) -> list[IPAddress]:
        """Return addresses of `host` as `ipaddress` objects."""

    @abc.abstractmethod
    def lookup_mx(self, name: str) -> list[MX]:
        """Return the mail exchangers of `name`."""

    @abc.abstractmethod
    def lookup_ns(self, name: str) -> list[NS]:
        """Return the name servers of `name`."""

    @abc.abstractmethod
    def lookup_port(self, network: str, service: str) -> int:
        """Return the port number of `service` on `network`."""

    @abc.abstractmethod
    def lookup_srv(self, service: str, proto: str, name: str) -> list[SRV]:
        """Return the service locations for ``_service._proto.name``."""

    @abc.abstractmethod
    def lookup_txt(self, name: str) -> list[str]:
        """Return the text records of `name`."""
