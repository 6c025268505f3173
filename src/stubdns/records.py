"""Data structures representing zone records."""
from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(slots=True)
class MX:
    """Mail exchanger entry.

    Attributes:
        host (str): Mail server name.
        preference (int): Lower values are preferred.
    """

    host: str
    preference: int

    def copy(self) -> MX:
        return replace(self)


@dataclass(slots=True)
class NS:
    """Name server entry."""

    host: str

    def copy(self) -> NS:
        return replace(self)


@dataclass(slots=True)
class SRV:
    """Service location entry.

    Attributes:
        target (str): Host providing the service.
        port (int): Port the service listens on.
        priority (int): Lower values are tried first.
        weight (int): Relative weight among entries of equal priority.
    """

    target: str
    port: int
    priority: int = 0
    weight: int = 0

    def copy(self) -> SRV:
        return replace(self)


@dataclass(slots=True)
class ZoneRecord:
    """All data held for one exact domain name or reverse-lookup key.

    Attributes:
        error: If set, every lookup landing on this record raises it.
        authenticated_data: Advisory DNSSEC flag; not used for resolution.
        a: IPv4 address strings.
        aaaa: IPv6 address strings.
        txt: Text strings.
        ptr: Host names for reverse lookups.
        cname: Alias target, empty when the name is not an alias.
        mx: Mail exchangers.
        ns: Name servers.
        srv: Service locations.
    """

    error: BaseException | None = None
    authenticated_data: bool = False
    a: list[str] = field(default_factory=list)
    aaaa: list[str] = field(default_factory=list)
    txt: list[str] = field(default_factory=list)
    ptr: list[str] = field(default_factory=list)
    cname: str = ""
    mx: list[MX] = field(default_factory=list)
    ns: list[NS] = field(default_factory=list)
    srv: list[SRV] = field(default_factory=list)

    def snapshot(self) -> ZoneRecord:
        """Return a copy that shares no mutable state with this record.

        The stored error instance is kept as-is so lookups raise the very
        object the caller configured.

        Returns:
            Detached `ZoneRecord`.
        """
        return replace(
            self,
            a=list(self.a),
            aaaa=list(self.aaaa),
            txt=list(self.txt),
            ptr=list(self.ptr),
            mx=[mx.copy() for mx in self.mx],
            ns=[ns.copy() for ns in self.ns],
            srv=[srv.copy() for srv in self.srv],
        )
