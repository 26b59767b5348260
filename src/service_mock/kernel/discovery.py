from __future__ import annotations

from dataclasses import dataclass

from service_mock.domain.topology import HandlerType, ServiceType


# Discovery descriptors carry no input/output schema: steps are configuration, not types.
@dataclass(frozen=True, slots=True)
class HandlerDiscovery:
    name: str
    ty: HandlerType | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name}
        if self.ty is not None:
            data["ty"] = self.ty.value
        return data


@dataclass(frozen=True, slots=True)
class ServiceDiscovery:
    name: str
    ty: ServiceType
    handlers: tuple[HandlerDiscovery, ...] = ()

    def handler(self, name: str) -> HandlerDiscovery | None:
        for handler in self.handlers:
            if handler.name == name:
                return handler
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "ty": self.ty.value,
            "handlers": [handler.to_dict() for handler in self.handlers],
        }
