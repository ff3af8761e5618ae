from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from railway_restarter.config import Settings
from railway_restarter.domain.entities import Deployment, Environment, MetricSample, Service, ServiceInstance


def build_settings(**overrides) -> Settings:
    defaults = {
        "RAILWAY_API_TOKEN": "test-token",
        "RAILWAY_API_ENDPOINT": "https://railway.test/graphql/v2",
        "RAILWAY_PROJECT_ID": "proj-1",
        "RAILWAY_ENVIRONMENT_NAME": "production",
        "TARGET_SERVICE_NAME": "web",
        "MAX_RAM_GB": 5.0,
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


class FakeRailwayClient:
    """In-memory stand-in for RailwayClient that records restart calls."""

    def __init__(
        self,
        environments: Optional[List[Environment]] = None,
        services: Optional[Dict[str, Service]] = None,
        usage: Optional[Dict[str, List[float]]] = None,
    ):
        self.environments = environments or []
        self.services = services or {}
        self.usage = usage or {}
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []
        self.restarted: List[str] = []
        self.restart_accepted = True
        self.closed = False

    def fail_on(self, method: str, error: Exception):
        self.failures[method] = error

    def _record(self, method: str, *args):
        self.calls.append((method,) + args)
        if method in self.failures:
            raise self.failures[method]

    async def get_environments(self, project_id):
        self._record("get_environments", project_id)
        return self.environments

    async def get_service(self, service_id):
        self._record("get_service", service_id)
        return self.services.get(service_id)

    async def get_memory_usage(self, project_id, service_id, environment_id=None, start_date=None):
        self._record("get_memory_usage", project_id, service_id, environment_id)
        now = datetime.now(timezone.utc)
        return [MetricSample(ts=now, value=v) for v in self.usage.get(service_id, [])]

    async def restart_deployment(self, deployment_id):
        self._record("restart_deployment", deployment_id)
        self.restarted.append(deployment_id)
        return self.restart_accepted

    async def close(self):
        self.closed = True


def clear_settings_environment(monkeypatch):
    for field in Settings.model_fields.values():
        if field.alias:
            monkeypatch.delenv(field.alias, raising=False)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep shell variables such as CRON_INTERVAL_RESTART out of Settings."""
    clear_settings_environment(monkeypatch)


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest.fixture
def production_client() -> FakeRailwayClient:
    """Production environment with a 'web' and a 'worker' service."""
    environments = [
        Environment(
            id="env-staging",
            name="staging",
            service_instances=[ServiceInstance(id="si-0", service_id="svc-web")],
        ),
        Environment(
            id="env-prod",
            name="production",
            service_instances=[
                ServiceInstance(id="si-1", service_id="svc-worker"),
                ServiceInstance(id="si-2", service_id="svc-web"),
            ],
        ),
    ]
    services = {
        "svc-web": Service(
            id="svc-web",
            name="web",
            deployments=[
                Deployment(id="dep-web-staging", status="SUCCESS", environment_id="env-staging"),
                Deployment(id="dep-web-old", status="REMOVED", environment_id="env-prod"),
                Deployment(id="dep-web-prod", status="SUCCESS", environment_id="env-prod"),
            ],
        ),
        "svc-worker": Service(
            id="svc-worker",
            name="worker",
            deployments=[Deployment(id="dep-worker-prod", status="SUCCESS", environment_id="env-prod")],
        ),
    }
    return FakeRailwayClient(environments=environments, services=services, usage={"svc-web": [5.2], "svc-worker": [9.9]})
