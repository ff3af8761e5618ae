from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

RUNNING_STATUS = "SUCCESS"


class Deployment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: Optional[str] = None
    environment_id: Optional[str] = Field(None, alias="environmentId")
    service_id: Optional[str] = Field(None, alias="serviceId")

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING_STATUS
