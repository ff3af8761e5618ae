from datetime import datetime

from pydantic import BaseModel

MEMORY_USAGE_GB = "MEMORY_USAGE_GB"


class MetricSample(BaseModel):
    ts: datetime
    value: float
