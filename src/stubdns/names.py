"""Domain name canonicalization and reverse-lookup keys."""
from __future__ import annotations

import ipaddress

from dnslib import DNSLabel
from dnslib.label import DNSLabelError

from .errors import MalformedAddressError

MAX_NAME_LENGTH = 253


def fqdn(name: str) -> str:
    """Return `name` with a trailing dot."""
    if name.endswith("."):
        return name
    return name + "."


def normalize_name(name: str) -> str:
    """Return the zone table key for `name`.

    Keys are fully qualified and lowercased, so ``Example.com``,
    ``example.com.`` and ``EXAMPLE.COM`` share one key.

    Args:
        name: Domain name or reverse-lookup key as given by the caller.

    Returns:
        Canonical key string.
    """
    return fqdn(name).lower()


def reverse_name(address: str) -> str:
    """Derive the reverse-lookup key for an IP address.

    Args:
        address: IPv4 or IPv6 address in text form.

    Returns:
        Key such as ``1.2.0.192.in-addr.arpa.`` or a nibble-form
        ``ip6.arpa.`` name.

    Raises:
        MalformedAddressError: If `address` is not an IP address.
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError as exc:
        raise MalformedAddressError(address) from exc
    return fqdn(ip.reverse_pointer)


def srv_query_name(service: str, proto: str, name: str) -> str:
    """Build the owner name of an SRV record set."""
    return f"_{service}._{proto}.{name}"


def validate_name(name: str) -> None:
    """Check that `name` is a syntactically valid domain name.

    Args:
        name: Domain name, with or without the trailing dot.

    Raises:
        ValueError: On empty or over-long labels, or an over-long name.
    """
    if len(name.rstrip(".")) > MAX_NAME_LENGTH:
        raise ValueError(f"name too long: {name!r}")
    try:
        DNSLabel(name)
    except (DNSLabelError, UnicodeError) as exc:
        raise ValueError(f"invalid name {name!r}: {exc}") from exc
