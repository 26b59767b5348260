from __future__ import annotations

from dataclasses import dataclass, field

from service_mock.errors import RegistryFrozenError, UnknownStepError
from service_mock.kernel.step import StepFactory


@dataclass
class StepRegistry:
    # Registry maps step kind names (the ``type`` of a step declaration) to factories.
    _factories: dict[str, StepFactory] = field(default_factory=dict)
    _frozen: bool = False

    def register(self, name: str, factory: StepFactory) -> None:
        # Registration happens before any service is assembled; later overrides are allowed until then.
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register step '{name}': registry is frozen")
        self._factories[name] = factory

    def freeze(self) -> StepRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> StepFactory:
        if name not in self._factories:
            raise UnknownStepError(name)
        return self._factories[name]

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories
