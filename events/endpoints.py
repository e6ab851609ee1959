"""
endpoints.py

Endpoint groupings for the two sides of a detection event.

A singular side is one host with an address, a port and a country code.
Port scans use ``MultiPortEndpoint``, which carries a tuple of ports.
An aggregate side describes many hosts through index-aligned tuples, where
``addrs[i]``, ``ports[i]`` and ``country_codes[i]`` all belong to host i.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from events.coercion import IpAddress
from utils import app_logger


class MisalignedEndpointsError(ValueError):
    """Raised when the parallel sequences of an aggregate side differ in length."""
    pass


def _is_port(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _reject_port(owner: str, value) -> None:
    error_msg = f"{owner} expects integer ports, got {value!r}"
    app_logger.error(error_msg)
    raise TypeError(error_msg)


@dataclass(frozen=True)
class Endpoint:
    """
    One host on one side of an event, rendered with a singular ``_port``.

    ``port`` is None when the detector did not observe a port.
    """
    addr: IpAddress
    port: Optional[int]
    country_code: Optional[bytes]

    def __post_init__(self) -> None:
        if self.port is not None and not _is_port(self.port):
            _reject_port("Endpoint", self.port)


@dataclass(frozen=True)
class MultiPortEndpoint:
    """
    One host scanned on several ports, rendered with a plural ``_ports``.
    """
    addr: IpAddress
    ports: Tuple[int, ...]
    country_code: Optional[bytes]

    def __post_init__(self) -> None:
        ports = () if self.ports is None else tuple(self.ports)
        for port in ports:
            if not _is_port(port):
                _reject_port("MultiPortEndpoint", port)
        object.__setattr__(self, "ports", ports)


@dataclass(frozen=True)
class EndpointGroup:
    """
    Many hosts on one side of an aggregate event.
    """
    addrs: Tuple[IpAddress, ...]
    ports: Tuple[int, ...]
    country_codes: Tuple[Optional[bytes], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "addrs", tuple(self.addrs))
        object.__setattr__(self, "ports", tuple(self.ports))
        object.__setattr__(self, "country_codes", tuple(self.country_codes))
        check_aligned(
            addrs=self.addrs,
            ports=self.ports,
            country_codes=self.country_codes,
        )

    def __len__(self) -> int:
        return len(self.addrs)


def check_aligned(**sequences: Sequence) -> None:
    """
    Fail unless every named sequence has the same length.

    Raises:
        MisalignedEndpointsError: naming each sequence and its length
    """
    lengths = {name: len(values) for name, values in sequences.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{name}={length}" for name, length in lengths.items())
        error_msg = f"Aggregate endpoint sequences are not aligned: {detail}"
        app_logger.error(error_msg)
        raise MisalignedEndpointsError(error_msg)
