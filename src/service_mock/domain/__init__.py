from .durations import DurationField, parse_duration
from .topology import (
    ALLOWED_HANDLER_TYPES,
    HandlerType,
    HandlerTypeField,
    ServiceType,
    ServiceTypeField,
    validate_handler_name,
    validate_service_name,
)
from .variable import NULL, Variable, VariableKind

# Domain exports: value types shared by kernel, steps and adapters.
__all__ = [
    "ALLOWED_HANDLER_TYPES",
    "DurationField",
    "HandlerType",
    "HandlerTypeField",
    "NULL",
    "ServiceType",
    "ServiceTypeField",
    "Variable",
    "VariableKind",
    "parse_duration",
    "validate_handler_name",
    "validate_service_name",
]
