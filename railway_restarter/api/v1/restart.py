from fastapi import APIRouter, Depends, Request

from railway_restarter.dependencies import get_restart_service, require_control_token
from railway_restarter.domain.services.restart_service import RestartService
from railway_restarter.schemas.restart import StatusResponse, TickReportResponse

router = APIRouter(tags=["restart"])


@router.get("/status", response_model=StatusResponse)
async def get_status(request: Request, service: RestartService = Depends(get_restart_service)):
    """Scheduled jobs and the last report of each workflow."""
    scheduler = getattr(request.app.state, "scheduler", None)
    jobs = []
    if scheduler is not None:
        for job in scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "trigger": str(job.trigger),
                "next_run_time": getattr(job, "next_run_time", None),
            })

    return {
        "running": service.is_running,
        "jobs": jobs,
        "last_reports": {name: report.to_dict() for name, report in service.last_reports.items()},
    }


@router.post(
    "/restart/check",
    response_model=TickReportResponse,
    dependencies=[Depends(require_control_token)],
)
async def trigger_threshold_check(service: RestartService = Depends(get_restart_service)):
    """Run the RAM threshold workflow now."""
    report = await service.check_memory()
    return report.to_dict()


@router.post(
    "/restart/force",
    response_model=TickReportResponse,
    dependencies=[Depends(require_control_token)],
)
async def trigger_force_restart(service: RestartService = Depends(get_restart_service)):
    """Restart the target service now, regardless of memory usage."""
    report = await service.force_restart()
    return report.to_dict()
