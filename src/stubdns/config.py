"""Zone file loading."""
from __future__ import annotations

import ipaddress
import logging
import os
from typing import Any

import yaml
from dnslib import QTYPE

from .errors import DNSLookupError
from .names import normalize_name, reverse_name, validate_name
from .records import MX, NS, SRV, ZoneRecord
from .resolver import MAX_CNAME_HOPS, TableResolver

logger = logging.getLogger(__name__)

SUPPORTED_QTYPES: dict[str, int] = {
    "A": QTYPE.A,
    "AAAA": QTYPE.AAAA,
    "CNAME": QTYPE.CNAME,
    "TXT": QTYPE.TXT,
    "NS": QTYPE.NS,
    "PTR": QTYPE.PTR,
    "MX": QTYPE.MX,
    "SRV": QTYPE.SRV,
}


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _parse_ints(value: str, count: int, what: str) -> tuple[list[int], str]:
    """Split ``"<int> ... <host>"`` into `count` integers and a host name."""
    parts = value.split()
    if len(parts) != count + 1:
        raise ValueError(f"{what} value must have {count + 1} fields, got {value!r}")
    try:
        nums = [int(p) for p in parts[:count]]
    except ValueError as exc:
        raise ValueError(f"{what} value {value!r}: {exc}") from exc
    if any(not 0 <= n <= 65535 for n in nums):
        raise ValueError(f"{what} value {value!r}: numbers must be in 0..65535")
    validate_name(parts[count])
    return nums, parts[count]


def _add_value(record: ZoneRecord, rtype: str, value: str) -> None:
    """Store one record value on `record`.

    Raises:
        ValueError: If the value does not fit the record type.
    """
    if rtype == "A":
        ipaddress.IPv4Address(value)
        record.a.append(value)
    elif rtype == "AAAA":
        ipaddress.IPv6Address(value)
        record.aaaa.append(value)
    elif rtype == "TXT":
        record.txt.append(value)
    elif rtype == "PTR":
        validate_name(value)
        record.ptr.append(value)
    elif rtype == "NS":
        validate_name(value)
        record.ns.append(NS(host=value))
    elif rtype == "CNAME":
        validate_name(value)
        if record.cname:
            raise ValueError(f"more than one CNAME ({record.cname!r}, {value!r})")
        record.cname = value
    elif rtype == "MX":
        (pref,), host = _parse_ints(value, 1, "MX")
        record.mx.append(MX(host=host, preference=pref))
    elif rtype == "SRV":
        (priority, weight, port), target = _parse_ints(value, 3, "SRV")
        record.srv.append(SRV(target=target, port=port, priority=priority, weight=weight))


def parse_zones(data: dict[str, Any]) -> dict[str, ZoneRecord]:
    """Build the zone table from a parsed zone file.

    Args:
        data: Mapping loaded from YAML.

    Returns:
        Zone records keyed by owner name as written in the file (reverse
        keys for IP-address PTR owners).

    Raises:
        ValueError: On invalid structure or record data.
    """
    raw = data.get("records", [])
    if not isinstance(raw, list):
        raise ValueError("'records' must be a list")

    zones: dict[str, ZoneRecord] = {}
    for i, item in enumerate(raw, 1):
        if not isinstance(item, dict):
            raise ValueError(f"record #{i}: mapping required, got {type(item).__name__}")
        try:
            name = str(item["name"]).strip()
            rtype = str(item["type"]).upper().strip()
            value = str(item["value"]).strip()
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed record #{i}: {exc}") from exc

        if rtype not in SUPPORTED_QTYPES:
            raise ValueError(f"record #{i}: unsupported type '{rtype}'")
        if rtype == "PTR" and _is_ip(name):
            name = reverse_name(name)
        if not name.endswith("."):
            raise ValueError(f"record #{i}: name must end with '.' (got {name!r})")

        try:
            validate_name(name)
            _add_value(zones.setdefault(name.lower(), ZoneRecord()), rtype, value)
        except ValueError as exc:
            raise ValueError(f"record #{i} ({name} {rtype}): {exc}") from exc

    errors = data.get("errors") or {}
    if not isinstance(errors, dict):
        raise ValueError("'errors' must be a mapping of name to message")
    for name, message in errors.items():
        key = normalize_name(str(name))
        zones.setdefault(key, ZoneRecord()).error = DNSLookupError(str(message), str(name))

    authenticated = data.get("authenticated") or []
    if not isinstance(authenticated, list):
        raise ValueError("'authenticated' must be a list of names")
    for name in authenticated:
        key = normalize_name(str(name))
        if key not in zones:
            raise ValueError(f"authenticated name {name!r} has no records")
        zones[key].authenticated_data = True

    return zones


class ZoneConfig:
    """Zone table loaded from a YAML file.

    Args:
        path: Filesystem path to the YAML zone file.

    Attributes:
        path: Path to the YAML zone file.
        skip_cname: Resolver alias-chasing switch from the file.
        max_cname_hops: Resolver alias hop limit from the file.
        zones: Parsed zone records.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._mtime = 0.0
        self.skip_cname = False
        self.max_cname_hops = MAX_CNAME_HOPS
        self.zones: dict[str, ZoneRecord] = {}
        self.load(force=True)

    def load(self, force: bool = False) -> None:
        """Load or reload the zone file.

        Args:
            force: Reload regardless of file mtime.

        Raises:
            ValueError: On invalid YAML structure or record data.
            FileNotFoundError: If the file is missing and `force=True`.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            if force:
                raise
            return

        if not force and st.st_mtime <= self._mtime:
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML parsing error: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("zone file root must be a mapping")

        skip_cname = data.get("skip_cname", False)
        if not isinstance(skip_cname, bool):
            raise ValueError(f"skip_cname must be a boolean, got {skip_cname!r}")
        try:
            max_hops = int(data.get("max_cname_hops", MAX_CNAME_HOPS))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid max_cname_hops: {exc}") from exc
        if max_hops < 0:
            raise ValueError(f"max_cname_hops must be >= 0, got {max_hops}")

        zones = parse_zones(data)

        self.skip_cname = skip_cname
        self.max_cname_hops = max_hops
        self.zones = zones
        self._mtime = st.st_mtime
        logger.info("zone file loaded: %d names", len(self.zones))

    def maybe_reload(self) -> None:
        """Reload on mtime change; keep the last good table on errors."""
        try:
            self.load(force=False)
        except (ValueError, yaml.YAMLError, OSError) as exc:
            logger.error("failed to reload zone file: %s", exc)

    def resolver(self, skip_cname: bool | None = None) -> TableResolver:
        """Build a resolver over the current table.

        Args:
            skip_cname: Overrides the zone file setting when not None.
        """
        return TableResolver(
            self.zones,
            skip_cname=self.skip_cname if skip_cname is None else skip_cname,
            max_cname_hops=self.max_cname_hops,
        )
