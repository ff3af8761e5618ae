"""Railway API client for the calls the restart workflows need."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from railway_restarter.config import Settings
from railway_restarter.domain.entities import (
    MEMORY_USAGE_GB,
    Deployment,
    Environment,
    MetricSample,
    Service,
    ServiceInstance,
)
from railway_restarter.infrastructure.railway import queries
from railway_restarter.infrastructure.railway.base_client import (
    BaseRailwayClient,
    RailwayResponseError,
)

logger = logging.getLogger(__name__)


def _nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Unwrap a Relay connection (``{"edges": [{"node": ...}]}``) into its nodes."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or [] if edge.get("node")]


class RailwayClient(BaseRailwayClient):
    """Client for the Railway environments, service, metrics and restart endpoints."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        super().__init__(settings, client=client)

    async def get_environments(self, project_id: str) -> List[Environment]:
        """Fetch the project's environments with their deployments and service instances."""
        logger.info(f"🔍 Fetching environments for project {project_id}")
        data = await self.execute(queries.ENVIRONMENTS_QUERY, {"projectId": project_id})

        try:
            environments = [
                Environment(
                    id=node["id"],
                    name=node["name"],
                    deployments=[Deployment.model_validate(d) for d in _nodes(node.get("deployments"))],
                    service_instances=[
                        ServiceInstance.model_validate(i) for i in _nodes(node.get("serviceInstances"))
                    ],
                )
                for node in _nodes(data.get("environments"))
            ]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error(f"❌ Malformed environments response: {e}")
            raise RailwayResponseError(f"Malformed environments response: {e}") from e

        logger.info(f"📋 Found {len(environments)} environment(s)")
        return environments

    async def get_service(self, service_id: str) -> Optional[Service]:
        """Fetch a service by id, or None when the API does not know it."""
        data = await self.execute(queries.SERVICE_QUERY, {"id": service_id})
        node = data.get("service")
        if node is None:
            logger.warning(f"⚠️ Service {service_id} not found")
            return None

        try:
            return Service(
                id=node.get("id") or service_id,
                name=node["name"],
                deployments=[Deployment.model_validate(d) for d in _nodes(node.get("deployments"))],
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error(f"❌ Malformed service response: {e}")
            raise RailwayResponseError(f"Malformed service response: {e}") from e

    async def get_memory_usage(
        self,
        project_id: str,
        service_id: str,
        environment_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
    ) -> List[MetricSample]:
        """Fetch memory usage samples (GB) for a service starting at ``start_date`` (default: now)."""
        start_date = start_date or datetime.now(timezone.utc)
        logger.info(f"📊 Getting memory metrics for service {service_id} (environment {environment_id})")

        variables = {
            "projectId": project_id,
            "serviceId": service_id,
            "environmentId": environment_id,
            "measurements": [MEMORY_USAGE_GB],
            "startDate": start_date.isoformat(),
        }
        data = await self.execute(queries.METRICS_QUERY, variables)

        try:
            for series in data.get("metrics") or []:
                if series.get("measurement", MEMORY_USAGE_GB) == MEMORY_USAGE_GB:
                    return [MetricSample.model_validate(v) for v in series.get("values") or []]
        except (TypeError, AttributeError, ValidationError) as e:
            logger.error(f"❌ Malformed metrics response: {e}")
            raise RailwayResponseError(f"Malformed metrics response: {e}") from e
        return []

    async def restart_deployment(self, deployment_id: str) -> bool:
        """Restart a deployment; True when the API accepted the restart."""
        logger.info(f"🔄 Restarting deployment {deployment_id}")
        data = await self.execute(queries.DEPLOYMENT_RESTART_MUTATION, {"id": deployment_id})
        accepted = data.get("deploymentRestart") is True
        if accepted:
            logger.info(f"✅ Restart accepted for deployment {deployment_id}")
        else:
            logger.warning(f"⚠️ Restart not accepted for deployment {deployment_id}: {data}")
        return accepted
