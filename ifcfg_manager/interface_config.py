"""
In-memory state of one ifcfg file.

``InterfaceConfig`` keeps the ordered key/value entries of the file and
exposes the typed mutations used to switch an interface between static
addressing and DHCP. Keys set for the first time are appended after the
existing ones; updating a key keeps its position.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence

from ifcfg_manager.codec import encode_config, parse_config, serialize_config
from ifcfg_manager.validation import validate_ip

logger = logging.getLogger(__name__)

BOOTPROTO_STATIC = "static"
BOOTPROTO_DHCP = "dhcp"

# Static addressing keys dropped when switching to DHCP
DHCP_CLEARED_KEYS = ("IPADDR", "NETMASK", "GATEWAY", "PREFIX", "DNS1", "DNS2", "DOMAIN")

MAX_DNS_SERVERS = 2


def _as_list(values: str | Sequence[str] | None) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return list(values)


class InterfaceConfig(Mapping):
    """
    Ordered ``KEY -> value`` entries of an interface configuration file.

    The mapping interface is read-only; use the ``set_*`` methods and
    ``enable_dhcp`` to change values. A value of ``None`` or ``""`` is blank
    and is omitted when the configuration is written.
    """

    def __init__(self, entries: Mapping[str, str | None] | None = None):
        self._entries: dict[str, str | None] = dict(entries or {})

    @classmethod
    def from_text(cls, text: str | bytes) -> "InterfaceConfig":
        """Build a configuration from raw file contents."""
        return cls(parse_config(text))

    def __getitem__(self, key: str) -> str | None:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"

    def _set(self, key: str, value: str | None) -> None:
        self._entries[key] = value

    @property
    def bootproto(self) -> str | None:
        return self._entries.get("BOOTPROTO")

    def set_address(self, address: str) -> None:
        """
        Use a static IP address.

        Args:
            address: IPv4 or IPv6 address literal

        Raises:
            InvalidAddressError: If the address is malformed; nothing is changed
        """
        validate_ip(address)
        self._set("BOOTPROTO", BOOTPROTO_STATIC)
        self._set("IPADDR", address)

    def set_gateway(self, address: str) -> None:
        """
        Set the default gateway.

        Raises:
            InvalidAddressError: If the address is malformed; nothing is changed
        """
        validate_ip(address)
        self._set("GATEWAY", address)

    def set_netmask(self, mask: str) -> None:
        """
        Set the subnet mask (dotted form, checked as an address literal).

        Raises:
            InvalidAddressError: If the mask is malformed; nothing is changed
        """
        validate_ip(mask)
        self._set("NETMASK", mask)

    def set_dns(self, servers: str | Sequence[str] | None) -> None:
        """
        Set one or two DNS servers.

        ``DNS1`` always receives the first entry, blank if there is none.
        ``DNS2`` is only written when a second entry is given, so an existing
        secondary server survives a single-server update; an empty second
        entry blanks it. Values are not validated.

        Args:
            servers: A server, or an ordered sequence of up to two servers
        """
        servers = _as_list(servers)
        if len(servers) > MAX_DNS_SERVERS:
            logger.warning(
                f"Only {MAX_DNS_SERVERS} DNS servers are supported, ignoring {servers[MAX_DNS_SERVERS:]}"
            )

        primary = servers[0] if servers else None
        self._set("DNS1", primary)
        if len(servers) > 1:
            self._set("DNS2", servers[1])

    def set_search_order(self, domains: str | Sequence[str] | None) -> None:
        """
        Set the DNS search domains.

        The stored value is the space-joined list wrapped in double quotes,
        e.g. ``"example.com corp.local"``.
        """
        joined = " ".join(_as_list(domains))
        self._set("DOMAIN", f'"{joined}"')

    def enable_dhcp(self) -> None:
        """Switch to DHCP, removing any static addressing keys."""
        self._set("BOOTPROTO", BOOTPROTO_DHCP)
        for key in DHCP_CLEARED_KEYS:
            self._entries.pop(key, None)

    def copy(self) -> "InterfaceConfig":
        return type(self)(self._entries)

    def replace_with(self, other: "InterfaceConfig") -> None:
        """Adopt the entries of ``other``, e.g. a staged copy."""
        self._entries = dict(other._entries)

    def to_text(self) -> str:
        return serialize_config(self._entries)

    def to_bytes(self) -> bytes:
        return encode_config(self._entries)
