from .delay import BusyStep, SleepStep
from .echo import EchoStep
from .increment import IncrementStep
from .invoke import CallStep, RemoteStep, SendStep
from .random_bytes import RandomStep
from .return_value import ReturnStep
from .state import GetStep, SetStep

__all__ = [
    "BusyStep",
    "CallStep",
    "EchoStep",
    "GetStep",
    "IncrementStep",
    "RandomStep",
    "RemoteStep",
    "ReturnStep",
    "SendStep",
    "SetStep",
    "SleepStep",
]
