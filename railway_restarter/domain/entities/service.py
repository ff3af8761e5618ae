from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from railway_restarter.domain.entities.deployment import Deployment


class Service(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    deployments: List[Deployment] = Field(default_factory=list)

    def deployments_in(self, environment_id: str) -> List[Deployment]:
        return [d for d in self.deployments if d.environment_id == environment_id]


class ServiceInstance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    service_id: str = Field(alias="serviceId")
    service_name: Optional[str] = Field(None, alias="serviceName")
