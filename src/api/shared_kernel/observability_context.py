"""Observation context for domain-oriented observability.

Observation contexts carry the metadata that every probe in a session should
attach to its log events, so that cache, store and dispatcher events can be
correlated with the operation that caused them.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata bound to probes.

    Attributes:
        request_id: Identifier of the operation being performed.
        session_id: Identifier of the store-session scope (one Forest).
        user_id: Who is performing the operation (if known).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", session_id="s-1")
        probe = DefaultGroupProbe().with_context(context)
    """

    request_id: str | None = None
    session_id: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.session_id is not None:
            result["session_id"] = self.session_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        result.update(self.extra)
        return result

    def with_session(self, session_id: str) -> ObservationContext:
        """Create a new context bound to a store-session scope."""
        return ObservationContext(
            request_id=self.request_id,
            session_id=session_id,
            user_id=self.user_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            session_id=self.session_id,
            user_id=self.user_id,
            extra={**self.extra, **kwargs},
        )
