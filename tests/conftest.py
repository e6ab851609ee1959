"""
Shared event factories for the test suite.
"""

from datetime import datetime, timezone
from ipaddress import IPv4Address

import pytest


TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
TIME_TEXT = "2024-01-02T03:04:05+00:00"

ORIG = IPv4Address("10.0.0.1")
RESP = IPv4Address("192.168.0.5")

COMMON = {
    "time": TIME,
    "sensor": "sensor-1",
    "proto": 6,
    "confidence": 0.9,
}

SINGLE_HOST = {
    "orig_addr": ORIG,
    "orig_port": 51000,
    "orig_country_code": b"US",
    "resp_addr": RESP,
    "resp_port": 80,
    "resp_country_code": b"KR",
}

TIMESPAN = {"start_time": TIME, "end_time": TIME}

AGGREGATE_ORIG = {
    "orig_addrs": [ORIG, IPv4Address("10.0.0.2")],
    "orig_ports": [51000, 51001],
    "orig_country_codes": [b"US", b"KR"],
}

AGGREGATE_RESP = {
    "resp_addrs": [RESP, IPv4Address("192.168.0.6")],
    "resp_ports": [445, 445],
    "resp_country_codes": [b"DE", None],
}

# Kinds whose constructor does not fit the plain session shape
SPECIAL_KWARGS = {
    "PortScan": {
        "orig_addr": ORIG,
        "orig_country_code": b"US",
        "resp_addr": RESP,
        "resp_ports": [22, 80],
        "resp_country_code": b"KR",
        **TIMESPAN,
    },
    "MultiHostPortScan": {**AGGREGATE_ORIG, **AGGREGATE_RESP, **TIMESPAN},
    "ExternalDdos": {**AGGREGATE_ORIG, "resp_addr": RESP, "resp_country_code": b"KR", **TIMESPAN},
    "RdpBruteForce": {"orig_addr": ORIG, "orig_country_code": b"US", **AGGREGATE_RESP, **TIMESPAN},
    "RepeatedHttpSessions": {**SINGLE_HOST, **TIMESPAN},
    "FtpBruteForce": {**SINGLE_HOST, **TIMESPAN},
    "LdapBruteForce": {**SINGLE_HOST, **TIMESPAN},
    "NetworkThreat": {**SINGLE_HOST, "start_time": TIME, "rule_id": 7},
    "HttpThreat": {**SINGLE_HOST, "start_time": TIME, "rule_id": 7},
}


def kwargs_for(kind_name: str, **overrides):
    kwargs = dict(COMMON)
    kwargs.update(SPECIAL_KWARGS.get(kind_name, {**SINGLE_HOST, "start_time": TIME}))
    kwargs.update(overrides)
    return kwargs


@pytest.fixture
def make_event():
    """Build any registered kind with working defaults, overridable per test."""
    from events import get_event_class

    def factory(kind_name: str, **overrides):
        return get_event_class(kind_name)(**kwargs_for(kind_name, **overrides))

    return factory
