"""IP address literal validation."""

import ipaddress

from ifcfg_manager.errors import InvalidAddressError


def validate_ip(value: str) -> str:
    """
    Check that ``value`` is an IPv4 or IPv6 address literal.

    Only syntax is checked; netmasks go through the same check. Prefix
    forms such as ``10.0.0.5/24`` or ``10.0.0.5/255.255.255.0`` are
    rejected: the prefix belongs in ``NETMASK`` or ``PREFIX``.

    Args:
        value: Candidate address

    Returns:
        The value unchanged

    Raises:
        InvalidAddressError: If the value is not an address literal
    """
    if not isinstance(value, str):
        raise InvalidAddressError(value)
    try:
        ipaddress.ip_address(value)
    except ValueError:
        raise InvalidAddressError(value) from None
    return value


def is_valid_ip(value: str) -> bool:
    try:
        validate_ip(value)
    except InvalidAddressError:
        return False
    return True
