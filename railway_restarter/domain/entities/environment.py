from typing import List

from pydantic import BaseModel, ConfigDict, Field

from railway_restarter.domain.entities.deployment import Deployment
from railway_restarter.domain.entities.service import ServiceInstance


class Environment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    service_instances: List[ServiceInstance] = Field(default_factory=list, alias="serviceInstances")
    deployments: List[Deployment] = Field(default_factory=list)

    def deployments_for(self, service_id: str) -> List[Deployment]:
        return [d for d in self.deployments if d.service_id == service_id]
