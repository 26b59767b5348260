from .composition_root import build_endpoint, build_handler, build_service, step_from_config
from .context import ExecutionContext
from .discovery import HandlerDiscovery, ServiceDiscovery
from .endpoint import BoundService, Endpoint, EndpointBuilder
from .handler import MockHandler
from .service import MockService, ServiceHandle
from .step import BaseStep, Step, StepFactory, step_dataclass, step_factory
from .step_registry import StepRegistry

# Kernel exports are minimal and runtime-focused.
__all__ = [
    "BaseStep",
    "BoundService",
    "Endpoint",
    "EndpointBuilder",
    "ExecutionContext",
    "HandlerDiscovery",
    "MockHandler",
    "MockService",
    "ServiceDiscovery",
    "ServiceHandle",
    "Step",
    "StepFactory",
    "StepRegistry",
    "build_endpoint",
    "build_handler",
    "build_service",
    "step_dataclass",
    "step_factory",
    "step_from_config",
]
