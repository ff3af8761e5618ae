from .restart import ScheduledJobResponse, ServiceCheckResponse, StatusResponse, TickReportResponse

__all__ = ["ScheduledJobResponse", "ServiceCheckResponse", "StatusResponse", "TickReportResponse"]
