"""Exceptions raised by the stub resolver."""
from __future__ import annotations

# Reported as the answering server, the way a real resolver names its upstream.
DEFAULT_SERVER = "127.0.0.1:53"


class ResolverError(Exception):
    """Base class for every error raised by this package."""


class DNSLookupError(ResolverError):
    """A lookup failed.

    Args:
        err: Short description of the failure.
        name: Name that was being looked up.
        server: Server reported as having answered.
        is_not_found: True when the name does not exist.
        is_temporary: True when retrying could succeed.

    Attributes:
        err: Short description of the failure.
        name: Name that was being looked up.
        server: Server reported as having answered.
        is_not_found: True when the name does not exist.
        is_temporary: True when retrying could succeed.
    """

    def __init__(
        self,
        err: str,
        name: str,
        server: str = DEFAULT_SERVER,
        is_not_found: bool = False,
        is_temporary: bool = False,
    ) -> None:
        super().__init__(err, name)
        self.err = err
        self.name = name
        self.server = server
        self.is_not_found = is_not_found
        self.is_temporary = is_temporary

    @classmethod
    def not_found(cls, name: str) -> DNSLookupError:
        """Build the error for a name absent from the zone table."""
        return cls("no such host", name, is_not_found=True)

    def __str__(self) -> str:
        msg = f"lookup {self.name}"
        if self.server:
            msg += f" on {self.server}"
        return f"{msg}: {self.err}"


class CNAMELoopError(DNSLookupError):
    """Alias chain exceeded the hop limit."""

    def __init__(self, name: str, hops: int) -> None:
        super().__init__(f"cname chain longer than {hops} hops", name)
        self.args = (name, hops)
        self.hops = hops


class MalformedAddressError(ResolverError, ValueError):
    """Address could not be parsed for a reverse lookup."""

    def __init__(self, address: str) -> None:
        super().__init__(address)
        self.address = address

    def __str__(self) -> str:
        return f"unrecognized address: {self.address!r}"


class MalformedRecordError(ResolverError, ValueError):
    """Address record in the zone table is not a valid IP address."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(name, value)
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"malformed IP in records for {self.name}: {self.value!r}"


class UnknownPortError(ResolverError):
    """Service name or network could not be mapped to a port."""

    def __init__(self, network: str, service: str, reason: str = "unknown port") -> None:
        super().__init__(network, service, reason)
        self.network = network
        self.service = service
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.network}/{self.service}: {self.reason}"
