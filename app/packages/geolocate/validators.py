"""IP address validation and classification."""

import ipaddress
from typing import Optional

from packages.geolocate.exceptions import InvalidIpFormatError

# RFC 1918 and RFC 4193 ranges; loopback is checked separately
PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(network)
    for network in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7")
)


def validate_ip(ip: Optional[str]) -> None:
    """Validate the textual form of an IP address.

    An absent or empty value means no check was requested and passes.

    Raises:
        InvalidIpFormatError: If the value is not a valid IPv4 or IPv6 address
    """
    if ip is None or ip == "":
        return

    try:
        ipaddress.ip_address(str(ip))
    except ValueError:
        raise InvalidIpFormatError(f"Invalid IP address format: {ip}")


def is_private_ip(ip: str) -> bool:
    """Check whether an address is private (RFC 1918 / RFC 4193) or loopback.

    IPv4-mapped IPv6 addresses are classified by their embedded IPv4 address.

    Raises:
        ValueError: If the address cannot be parsed
    """
    address = ipaddress.ip_address(str(ip))
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped

    if address.is_loopback:
        return True
    return any(address in network for network in PRIVATE_NETWORKS)
