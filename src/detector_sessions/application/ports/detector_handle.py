"""Port describing the per-session detector sub-resource."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DetectorHandle(Protocol):
    """Externally owned detector handler attached to a session."""

    def setup(self, preferences: Mapping[str, Any]) -> int | None:
        """Apply ``preferences`` and return how many detectors were filtered out."""


__all__ = ["DetectorHandle"]
