from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RunReport(BaseModel):
    """What one dispatch cycle did, returned as the webhook response body."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    ran: List[str] = Field(default_factory=list)
    to_run: List[str] = Field(default_factory=list, alias="toRun")
    already_running: List[str] = Field(default_factory=list, alias="alreadyRunning")


class HealthStatus(BaseModel):
    ok: bool = True
    version: str
