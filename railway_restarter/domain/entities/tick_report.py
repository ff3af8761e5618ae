"""Tick Report Entity - Outcome of one workflow run, success or failure kind."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class Workflow(str, Enum):
    THRESHOLD = "threshold"
    FORCE = "force"


class RestartOutcome(str, Enum):
    RESTARTED = "restarted"
    BELOW_THRESHOLD = "below_threshold"
    ENVIRONMENT_NOT_FOUND = "environment_not_found"
    SERVICE_NOT_FOUND = "service_not_found"
    DEPLOYMENT_NOT_FOUND = "deployment_not_found"
    METRICS_UNAVAILABLE = "metrics_unavailable"
    RESTART_REJECTED = "restart_rejected"
    NOT_CONFIGURED = "not_configured"
    API_ERROR = "api_error"
    SKIPPED = "skipped"


@dataclass
class ServiceCheck:
    """What happened to one matched service during a tick."""

    service_id: str
    service_name: str
    outcome: RestartOutcome
    deployment_id: Optional[str] = None
    memory_usage_gb: Optional[float] = None
    threshold_gb: Optional[float] = None

    @property
    def restarted(self) -> bool:
        return self.outcome is RestartOutcome.RESTARTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "outcome": self.outcome.value,
            "deployment_id": self.deployment_id,
            "memory_usage_gb": self.memory_usage_gb,
            "threshold_gb": self.threshold_gb,
        }


@dataclass
class TickReport:
    """Result of a single threshold or force tick.

    ``outcome`` separates "nothing matched" from "the API failed", which a
    log line alone cannot do. ``checks`` holds one entry per matched service
    that was processed before the tick ended.
    """

    workflow: Workflow
    outcome: Optional[RestartOutcome] = None
    detail: Optional[str] = None
    checks: List[ServiceCheck] = field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def __post_init__(self):
        if self.started_at is None:
            self.started_at = datetime.now(timezone.utc)

    @property
    def restart_count(self) -> int:
        return sum(1 for check in self.checks if check.restarted)

    def finish(self, outcome: Optional[RestartOutcome] = None, detail: Optional[str] = None) -> "TickReport":
        """Close the report; without an explicit outcome it is derived from the checks."""
        if outcome is None:
            outcome = self._summarize()
        self.outcome = outcome
        if detail is not None:
            self.detail = detail
        self.finished_at = datetime.now(timezone.utc)
        return self

    def _summarize(self) -> RestartOutcome:
        if not self.checks:
            return RestartOutcome.SERVICE_NOT_FOUND
        if self.restart_count:
            return RestartOutcome.RESTARTED
        return self.checks[0].outcome

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "workflow": self.workflow.value,
            "outcome": self.outcome.value if self.outcome else None,
            "detail": self.detail,
            "restart_count": self.restart_count,
            "checks": [check.to_dict() for check in self.checks],
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
