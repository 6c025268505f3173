"""Shared fixtures for the stub resolver tests."""
from __future__ import annotations

import os
import sys

import pytest

# Ensure 'src' is on sys.path so 'stubdns' is importable without installing.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from stubdns.records import MX, NS, SRV, ZoneRecord  # noqa: E402
from stubdns.names import reverse_name  # noqa: E402


@pytest.fixture
def zones() -> dict[str, ZoneRecord]:
    """A small table covering every record type and an alias chain."""
    return {
        "example.com.": ZoneRecord(
            a=["1.2.3.4"],
            aaaa=["::1"],
            txt=["v=spf1 -all"],
            mx=[MX(host="mx1.example.com.", preference=10), MX(host="mx2.example.com.", preference=20)],
            ns=[NS(host="ns1.example.com."), NS(host="ns2.example.com.")],
        ),
        "_sip._tcp.example.com.": ZoneRecord(
            srv=[SRV(target="sip.example.com.", port=5060, priority=10, weight=5)],
        ),
        "a.com.": ZoneRecord(cname="b.com."),
        "b.com.": ZoneRecord(cname="c.com.", a=["10.0.0.2"]),
        "c.com.": ZoneRecord(a=["9.9.9.9"], aaaa=["2001:db8::9"], txt=["terminal"]),
        "empty.com.": ZoneRecord(txt=["no addresses here"]),
        reverse_name("192.0.2.1"): ZoneRecord(ptr=["host.example.com."]),
    }
