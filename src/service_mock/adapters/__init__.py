from .http import create_app
from .local_host import LocalInvocation, LocalRequest, LocalRuntime

__all__ = ["LocalInvocation", "LocalRequest", "LocalRuntime", "create_app"]
