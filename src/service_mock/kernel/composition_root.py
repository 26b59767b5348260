from __future__ import annotations

import logging

from service_mock.domain.topology import ServiceType
from service_mock.errors import ConfigError, InvalidHandlerError, StepBuildError
from service_mock.kernel.endpoint import Endpoint, EndpointBuilder
from service_mock.kernel.handler import MockHandler
from service_mock.kernel.service import MockService
from service_mock.kernel.step import Step
from service_mock.kernel.step_registry import StepRegistry
from service_mock.usecases.config_models import AppConfig, HandlerConfig, ServiceConfig, StepDecl

logger = logging.getLogger(__name__)


def step_from_config(registry: StepRegistry, service_type: ServiceType, decl: StepDecl) -> Step:
    # Resolve the kind, parse params, then check the step against the service topology.
    factory = registry.get(decl.type)
    step = factory(decl.params)
    step.validate(service_type)
    return step


def build_handler(
    registry: StepRegistry,
    service: str,
    service_type: ServiceType,
    name: str,
    config: HandlerConfig,
) -> MockHandler:
    steps: list[Step] = []
    for idx, decl in enumerate(config.steps):
        try:
            steps.append(step_from_config(registry, service_type, decl))
        except ConfigError as exc:
            raise StepBuildError(service, name, idx, decl.type, exc) from exc

    handler = MockHandler.of(steps, config.type, name=name)
    try:
        handler.validate(service_type)
    except InvalidHandlerError as exc:
        raise InvalidHandlerError(f"Handler '{name}' of service '{service}': {exc}") from exc
    return handler


def build_service(registry: StepRegistry, name: str, config: ServiceConfig) -> MockService:
    logger.debug("Setting up service '%s' of type %s", name, config.type)
    service = MockService(name=name, ty=config.type)
    for handler_name, handler_config in config.handlers.items():
        logger.info("Adding handler '%s' to service '%s'", handler_name, name)
        service.add_handler(handler_name, build_handler(registry, name, config.type, handler_name, handler_config))
    return service


def build_endpoint(config: AppConfig, registry: StepRegistry) -> Endpoint:
    # Composition root: config -> steps -> handlers -> services -> endpoint.
    if not registry.frozen:
        registry.freeze()

    builder = EndpointBuilder()
    for name, service_config in config.services.items():
        builder = build_service(registry, name, service_config).bind(builder)
    return builder.build()
