"""Restart Service - memory-threshold and forced restarts of the target service."""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from railway_restarter.config import Settings
from railway_restarter.domain.entities import (
    Deployment,
    Environment,
    RestartOutcome,
    Service,
    ServiceCheck,
    TickReport,
    Workflow,
)
from railway_restarter.infrastructure.railway import RailwayClient, RailwayClientError

logger = logging.getLogger(__name__)


class RestartService:
    """Runs the threshold and force workflows against one Railway service.

    Both workflows share a single lock: a tick that fires while another one is
    still talking to the API is reported as skipped and makes no calls.
    """

    def __init__(self, client: RailwayClient, settings: Settings):
        self.client = client
        self.settings = settings
        self._lock = asyncio.Lock()
        self.last_reports: Dict[str, TickReport] = {}

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def check_memory(self) -> TickReport:
        """Restart the target deployment when its memory usage reaches MAX_RAM_GB."""
        return await self._run(Workflow.THRESHOLD, self._check_memory)

    async def force_restart(self) -> TickReport:
        """Restart the target deployment unconditionally."""
        return await self._run(Workflow.FORCE, self._force_restart)

    def exceeds_threshold(self, usage_gb: float) -> bool:
        threshold = self.settings.MAX_RAM_GB
        if self.settings.RESTART_THRESHOLD_INCLUSIVE:
            return usage_gb >= threshold
        return usage_gb > threshold

    async def _run(self, workflow: Workflow, body: Callable[[TickReport], Awaitable[None]]) -> TickReport:
        report = TickReport(workflow=workflow)

        if self._lock.locked():
            logger.warning(f"⏭️ Skipping {workflow.value} tick: previous tick still running")
            return report.finish(RestartOutcome.SKIPPED, "previous tick still running")

        async with self._lock:
            try:
                await body(report)
            except RailwayClientError as e:
                logger.error(f"❌ {workflow.value} tick aborted: {e}")
                report.finish(RestartOutcome.API_ERROR, str(e))

        if report.outcome is None:
            report.finish()
        logger.info(
            f"🏁 {workflow.value} tick finished: {report.outcome.value} ({report.restart_count} restart(s))"
        )
        self.last_reports[workflow.value] = report
        return report

    async def _check_memory(self, report: TickReport):
        threshold = self.settings.MAX_RAM_GB
        if threshold is None:
            logger.warning("⚠️ MAX_RAM_GB is not configured, skipping memory check")
            report.finish(RestartOutcome.NOT_CONFIGURED, "MAX_RAM_GB is not configured")
            return

        target = await self._find_target(report)
        if target is None:
            return
        environment, environment_id, services = target

        for service in services:
            samples = await self.client.get_memory_usage(
                self.settings.RAILWAY_PROJECT_ID, service.id, environment_id
            )
            if not samples:
                logger.warning(f"⚠️ No memory samples for service {service.name}")
                report.checks.append(
                    ServiceCheck(service.id, service.name, RestartOutcome.METRICS_UNAVAILABLE, threshold_gb=threshold)
                )
                continue

            usage = samples[0].value
            logger.info(f"📊 Current RAM usage: {usage} GB, max RAM usage: {threshold} GB")
            if not self.exceeds_threshold(usage):
                report.checks.append(
                    ServiceCheck(
                        service.id,
                        service.name,
                        RestartOutcome.BELOW_THRESHOLD,
                        memory_usage_gb=usage,
                        threshold_gb=threshold,
                    )
                )
                continue

            check = await self._restart(environment, environment_id, service)
            check.memory_usage_gb = usage
            check.threshold_gb = threshold
            report.checks.append(check)

    async def _force_restart(self, report: TickReport):
        target = await self._find_target(report)
        if target is None:
            return
        environment, environment_id, services = target

        for service in services:
            report.checks.append(await self._restart(environment, environment_id, service))

    async def _find_target(self, report: TickReport) -> Optional[Tuple[Environment, str, List[Service]]]:
        """Locate the configured environment and the services in it named TARGET_SERVICE_NAME."""
        environments = await self.client.get_environments(self.settings.RAILWAY_PROJECT_ID)
        environment = next(
            (env for env in environments if env.name == self.settings.RAILWAY_ENVIRONMENT_NAME), None
        )
        if environment is None:
            logger.warning(f"⚠️ Environment '{self.settings.RAILWAY_ENVIRONMENT_NAME}' not found")
            report.finish(
                RestartOutcome.ENVIRONMENT_NOT_FOUND,
                f"environment '{self.settings.RAILWAY_ENVIRONMENT_NAME}' not found",
            )
            return None

        environment_id = self.settings.RAILWAY_ENVIRONMENT_ID or environment.id

        services = []
        for instance in environment.service_instances:
            service = await self.client.get_service(instance.service_id)
            if service is None or service.name != self.settings.TARGET_SERVICE_NAME:
                continue
            services.append(service)

        if not services:
            logger.warning(
                f"⚠️ Service '{self.settings.TARGET_SERVICE_NAME}' not found in environment {environment.name}"
            )
            report.finish(
                RestartOutcome.SERVICE_NOT_FOUND,
                f"service '{self.settings.TARGET_SERVICE_NAME}' not found",
            )
            return None

        return environment, environment_id, services

    async def _restart(self, environment: Environment, environment_id: str, service: Service) -> ServiceCheck:
        deployment = self.select_deployment(environment, environment_id, service)
        if deployment is None:
            logger.warning(f"⚠️ No deployment of {service.name} in environment {environment_id}")
            return ServiceCheck(service.id, service.name, RestartOutcome.DEPLOYMENT_NOT_FOUND)

        logger.info(f"🔄 Restarting {service.name} deployment {deployment.id}")
        accepted = await self.client.restart_deployment(deployment.id)
        outcome = RestartOutcome.RESTARTED if accepted else RestartOutcome.RESTART_REJECTED
        return ServiceCheck(service.id, service.name, outcome, deployment_id=deployment.id)

    @staticmethod
    def select_deployment(environment: Environment, environment_id: str, service: Service) -> Optional[Deployment]:
        """Pick the deployment to restart, preferring a running one in the scoped environment."""
        candidates = service.deployments_in(environment_id) or environment.deployments_for(service.id)
        if not candidates:
            return None
        return next((d for d in candidates if d.is_running), candidates[0])
