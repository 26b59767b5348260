from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from service_mock.domain.variable import Variable
from service_mock.errors import ReturnValueAlreadySetError

T = TypeVar("T")

# Sentinel for the "Unset" state of the return slot; None is a valid JSON return.
_UNSET = object()


@dataclass(slots=True)
class ExecutionContext:
    # Per-invocation scratch space shared by the steps of one handler run.
    variables: dict[str, Variable] = field(default_factory=dict)
    _ret: object = _UNSET

    def set(self, name: str, value: object) -> None:
        # Last write wins.
        self.variables[name] = Variable.of(value)

    def get(self, name: str, tp: type[T]) -> T | None:
        """Typed read.

        Returns None when the variable is absent or Null and raises
        VariableTypeError when it holds another variant than ``tp``.
        """
        variable = self.variables.get(name)
        if variable is None or variable.is_null:
            return None
        return variable.to(tp)

    def get_variable(self, name: str) -> Variable | None:
        return self.variables.get(name)

    def return_value(self, value: object) -> None:
        # The slot moves Unset -> Set exactly once.
        if self._ret is not _UNSET:
            raise ReturnValueAlreadySetError("return_value can only be called once")
        self._ret = value

    @property
    def has_return_value(self) -> bool:
        return self._ret is not _UNSET

    def ret(self) -> object:
        # JSON result of the handler; never set maps to null.
        return None if self._ret is _UNSET else self._ret
