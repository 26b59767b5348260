from __future__ import annotations

import re
from enum import Enum
from typing import Annotated

from pydantic import BeforeValidator

from service_mock.errors import InvalidNameError

# Name syntax accepted by the host's discovery protocol.
_SERVICE_NAME = re.compile(r"^([a-zA-Z]|_[a-zA-Z0-9])[a-zA-Z0-9._-]*$")
_HANDLER_NAME = re.compile(r"^([a-zA-Z]|_[a-zA-Z0-9])[a-zA-Z0-9_]*$")


def _normalize(value: str) -> str:
    return re.sub(r"[\s_-]", "", value).upper()


class ServiceType(str, Enum):
    # Addressing model of a service.
    SERVICE = "SERVICE"
    VIRTUAL_OBJECT = "VIRTUAL_OBJECT"
    WORKFLOW = "WORKFLOW"

    @classmethod
    def _missing_(cls, value: object) -> ServiceType | None:
        # Accept "VirtualObject", "virtual_object", "virtual-object", ...
        if isinstance(value, str):
            wanted = _normalize(value)
            for member in cls:
                if _normalize(member.value) == wanted:
                    return member
        return None

    @property
    def is_keyed(self) -> bool:
        return self is not ServiceType.SERVICE

    def __str__(self) -> str:
        return self.value


class HandlerType(str, Enum):
    EXCLUSIVE = "EXCLUSIVE"
    SHARED = "SHARED"
    WORKFLOW = "WORKFLOW"

    @classmethod
    def _missing_(cls, value: object) -> HandlerType | None:
        if isinstance(value, str):
            wanted = _normalize(value)
            for member in cls:
                if member.value == wanted:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


# Handler kinds each service type may declare.
ALLOWED_HANDLER_TYPES: dict[ServiceType, frozenset[HandlerType]] = {
    ServiceType.SERVICE: frozenset(),
    ServiceType.VIRTUAL_OBJECT: frozenset({HandlerType.EXCLUSIVE, HandlerType.SHARED}),
    ServiceType.WORKFLOW: frozenset({HandlerType.WORKFLOW, HandlerType.SHARED}),
}


def validate_service_name(name: str) -> str:
    if not isinstance(name, str) or not _SERVICE_NAME.match(name):
        raise InvalidNameError(f"Invalid service name {name!r}")
    return name


def validate_handler_name(name: str) -> str:
    if not isinstance(name, str) or not _HANDLER_NAME.match(name):
        raise InvalidNameError(f"Invalid handler name {name!r}")
    return name


def _coerce(enum_cls: type[Enum]):
    def coerce(value: object) -> object:
        # Run aliases through _missing_ before pydantic checks membership.
        return enum_cls(value) if isinstance(value, str) else value

    return coerce


ServiceTypeField = Annotated[ServiceType, BeforeValidator(_coerce(ServiceType))]
HandlerTypeField = Annotated[HandlerType, BeforeValidator(_coerce(HandlerType))]
