# sitemap_ping/models.py
"""
Data models shared by the phases of the ping hook.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from urllib.parse import quote

T = TypeVar("T")

# marks left unescaped in a query value, besides letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode *value* for use as a single query parameter value."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


@dataclass(frozen=True, slots=True)
class Proceed(Generic[T]):
    """Phase finished; the run continues with *value*."""

    value: T


@dataclass(frozen=True, slots=True)
class Stop:
    """Phase ended the run early. Still a successful run for the caller."""

    reason: str


PhaseOutcome = Union[Proceed[T], Stop]


@dataclass(frozen=True, slots=True)
class SitemapLocation:
    """Sitemap file confirmed to exist in the build output."""

    path: str
    configured: str

    @property
    def fallback(self) -> bool:
        return self.path != self.configured


@dataclass(frozen=True, slots=True)
class PingTarget:
    """A search engine endpoint; ``url_template`` holds a ``{sitemap}`` placeholder."""

    name: str
    url_template: str

    def url_for(self, sitemap_url: str) -> str:
        return self.url_template.format(sitemap=encode_uri_component(sitemap_url))


class Outcome(str, Enum):
    SUCCESS = "success"
    NON_SUCCESS = "non_success"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class PingResult:
    """Outcome of a single ping, consumed by the logger and the report."""

    target: PingTarget
    outcome: Outcome
    status: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_status(cls, target: PingTarget, status: int) -> PingResult:
        outcome = Outcome.SUCCESS if status < 300 else Outcome.NON_SUCCESS
        return cls(target, outcome, status=status)

    @classmethod
    def from_error(cls, target: PingTarget, exc: BaseException) -> PingResult:
        return cls(target, Outcome.TRANSPORT_ERROR, error=str(exc) or type(exc).__name__)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


class RunStatus(str, Enum):
    UNRESOLVED = "unresolved"
    SITEMAP_MISSING = "sitemap_missing"
    NOTIFIED = "notified"
    CRASHED = "crashed"


@dataclass(slots=True)
class HookReport:
    """Summary of one hook run. Every status is a successful run for the orchestrator."""

    status: RunStatus
    sitemap_url: Optional[str] = None
    location: Optional[SitemapLocation] = None
    results: List[PingResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "sitemap_url": self.sitemap_url,
            "sitemap_path": self.location.path if self.location else None,
            "fallback": self.location.fallback if self.location else False,
            "results": [
                {
                    "target": r.target.name,
                    "url": r.target.url_for(self.sitemap_url) if self.sitemap_url else None,
                    "outcome": r.outcome.value,
                    "status": r.status,
                    "error": r.error,
                }
                for r in self.results
            ],
        }


__all__ = [
    "encode_uri_component",
    "Proceed",
    "Stop",
    "PhaseOutcome",
    "SitemapLocation",
    "PingTarget",
    "Outcome",
    "PingResult",
    "RunStatus",
    "HookReport",
]
