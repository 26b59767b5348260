from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel

from service_mock.domain.topology import HandlerTypeField, ServiceTypeField

# Config models map the YAML document to typed structures.


class StepDecl(BaseModel):
    # Step declaration: a registered step kind plus its kind-specific params.
    model_config = ConfigDict(extra="forbid", frozen=True)
    type: str
    params: Any = None


class HandlerConfig(BaseModel):
    # Handler kind is optional; the host default applies when omitted.
    model_config = ConfigDict(extra="forbid", frozen=True)
    type: HandlerTypeField | None = None
    steps: list[StepDecl] = Field(default_factory=list)


class ServiceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    type: ServiceTypeField
    handlers: dict[str, HandlerConfig] = Field(default_factory=dict)


class AppConfig(RootModel[dict[str, ServiceConfig]]):
    # The document root maps service names to service declarations.

    @property
    def services(self) -> dict[str, ServiceConfig]:
        return self.root
