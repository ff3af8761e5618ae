from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ServiceCheckResponse(BaseModel):
    service_id: str
    service_name: str
    outcome: str
    deployment_id: Optional[str] = None
    memory_usage_gb: Optional[float] = None
    threshold_gb: Optional[float] = None


class TickReportResponse(BaseModel):
    workflow: str = Field(..., description="threshold or force")
    outcome: Optional[str] = Field(None, description="Result kind of the tick")
    detail: Optional[str] = None
    restart_count: int = 0
    checks: List[ServiceCheckResponse] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class ScheduledJobResponse(BaseModel):
    id: str
    name: str
    trigger: str
    next_run_time: Optional[datetime] = None


class StatusResponse(BaseModel):
    running: bool = Field(..., description="Whether a tick is in progress")
    jobs: List[ScheduledJobResponse] = Field(default_factory=list)
    last_reports: Dict[str, TickReportResponse] = Field(default_factory=dict)
