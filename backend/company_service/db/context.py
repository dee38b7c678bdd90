"""Request context for ownership enforcement."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the caller identity.

    ``user_id`` is the opaque owning identity every Company is bound to. It is
    the sole authorization boundary for REST operations.
    """

    user_id: str
