from .deployment import Deployment
from .environment import Environment
from .metric import MEMORY_USAGE_GB, MetricSample
from .service import Service, ServiceInstance
from .tick_report import RestartOutcome, ServiceCheck, TickReport, Workflow

__all__ = [
    "Deployment",
    "Environment",
    "MEMORY_USAGE_GB",
    "MetricSample",
    "RestartOutcome",
    "Service",
    "ServiceCheck",
    "ServiceInstance",
    "TickReport",
    "Workflow",
]
