from .host import HostContext, HostRequest, Invocation, RequestTarget

__all__ = ["HostContext", "HostRequest", "Invocation", "RequestTarget"]
