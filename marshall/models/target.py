"""SSH target data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SSHTarget:
    """Connection parameters parsed from a host identifier."""

    hostname: str
    user: str | None = None
    port: int = 22
