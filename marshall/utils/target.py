"""Host identifier validation and parsing."""

from marshall.models import SSHTarget

SUSPICIOUS_CHARS = ["/", "\\", ";", "&", "|", "$", "`", " ", "\t", "\n", "\r", "\x00"]


def validate_host(host: str) -> str:
    """Validate a host identifier.

    Args:
        host: The host identifier to validate

    Returns:
        Validated host identifier with surrounding whitespace removed

    Raises:
        ValueError: If host identifier is invalid
    """
    host = host.strip()
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > 253:
        raise ValueError(f"Host name too long: {len(host)} chars")

    # Reject characters that could enable injection
    for char in SUSPICIOUS_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host


def _parse_port(value: str, identifier: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise ValueError(f"Invalid port in host '{identifier}': {value!r}") from e
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in host '{identifier}': {port}")
    return port


def parse_target(identifier: str) -> SSHTarget:
    """Parse a host identifier into connection parameters.

    Formats:
        - "host" or "10.0.0.5"
        - "user@host"
        - "host:2222" or "user@host:2222"
        - "[2001:db8::1]:2222" or a bare IPv6 address

    Returns:
        SSHTarget with parsed components.

    Raises:
        ValueError: If identifier format is invalid.
    """
    identifier = validate_host(identifier)

    user: str | None = None
    rest = identifier
    if "@" in rest:
        user, _, rest = rest.rpartition("@")
        if not user:
            raise ValueError(f"Empty user in host '{identifier}'")

    port = 22
    if rest.startswith("["):
        address, bracket, tail = rest[1:].partition("]")
        if not bracket or not address:
            raise ValueError(f"Invalid bracketed address in host '{identifier}'")
        if tail:
            if not tail.startswith(":"):
                raise ValueError(f"Invalid host '{identifier}'")
            port = _parse_port(tail[1:], identifier)
        hostname = address
    elif rest.count(":") == 1:
        hostname, _, port_text = rest.partition(":")
        port = _parse_port(port_text, identifier)
    else:
        # Bare IPv6 addresses carry no port
        hostname = rest

    if not hostname:
        raise ValueError(f"Empty hostname in host '{identifier}'")

    return SSHTarget(hostname=hostname, user=user, port=port)
