from __future__ import annotations


# Configuration errors are fatal at startup and stop the endpoint from binding.
class ConfigError(ValueError):
    pass


class UnknownStepError(ConfigError, KeyError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown step type: {kind}")
        self.kind = kind

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class InvalidStepParametersError(ConfigError):
    def __init__(self, kind: str, detail: str) -> None:
        super().__init__(f"Invalid parameters for step '{kind}': {detail}")
        self.kind = kind
        self.detail = detail


class InvalidServiceTypeError(ConfigError):
    def __init__(self, kind: str, service_type: object, reason: str | None = None) -> None:
        message = f"Step '{kind}' is not valid for service type {service_type}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind
        self.service_type = service_type


class InvalidNameError(ConfigError):
    pass


class InvalidHandlerError(ConfigError):
    pass


class RegistryFrozenError(RuntimeError):
    pass


class StepBuildError(ConfigError):
    # Wraps any failure to build or validate a step with its position in the config.
    def __init__(self, service: str, handler: str, index: int, kind: str, cause: Exception) -> None:
        super().__init__(
            f"Failed to create step {index} ('{kind}') for handler '{handler}' of service '{service}': {cause}"
        )
        self.service = service
        self.handler = handler
        self.index = index
        self.kind = kind
        self.cause = cause


# Invocation errors are per request and are reported back to the host.
class TerminalError(Exception):
    # A failure the host should not retry.
    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnknownServiceError(LookupError):
    def __init__(self, service: str) -> None:
        super().__init__(f"Unknown service '{service}'")
        self.service = service


class UnknownHandlerError(LookupError):
    def __init__(self, service: str, handler: str) -> None:
        super().__init__(f"Unknown handler '{handler}' on service '{service}'")
        self.service = service
        self.handler = handler


class ReturnValueAlreadySetError(RuntimeError):
    # Two steps of one handler tried to set the return value; the step list is misconfigured.
    pass


class VariableTypeError(TypeError):
    pass


class VariableDecodeError(ValueError):
    pass
