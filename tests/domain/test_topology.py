from __future__ import annotations

import pytest

from service_mock.domain.topology import (
    ALLOWED_HANDLER_TYPES,
    HandlerType,
    ServiceType,
    validate_handler_name,
    validate_service_name,
)
from service_mock.errors import InvalidNameError


@pytest.mark.parametrize("alias", ["VIRTUAL_OBJECT", "VirtualObject", "virtual_object", "virtual-object"])
def test_service_type_accepts_aliases(alias: str) -> None:
    assert ServiceType(alias) is ServiceType.VIRTUAL_OBJECT


def test_unknown_service_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        ServiceType("Actor")


def test_handler_type_accepts_case_variants() -> None:
    assert HandlerType("shared") is HandlerType.SHARED
    assert HandlerType("Exclusive") is HandlerType.EXCLUSIVE


def test_only_keyed_services_have_keys() -> None:
    assert not ServiceType.SERVICE.is_keyed
    assert ServiceType.VIRTUAL_OBJECT.is_keyed
    assert ServiceType.WORKFLOW.is_keyed


def test_allowed_handler_types_follow_service_type() -> None:
    # Stateless services declare no handler kinds; workflows have exactly one run-style kind.
    assert ALLOWED_HANDLER_TYPES[ServiceType.SERVICE] == frozenset()
    assert HandlerType.WORKFLOW not in ALLOWED_HANDLER_TYPES[ServiceType.VIRTUAL_OBJECT]
    assert HandlerType.EXCLUSIVE not in ALLOWED_HANDLER_TYPES[ServiceType.WORKFLOW]


def test_name_validation() -> None:
    assert validate_service_name("Counter.v1") == "Counter.v1"
    assert validate_handler_name("_run") == "_run"
    with pytest.raises(InvalidNameError):
        validate_service_name("1bad")
    with pytest.raises(InvalidNameError):
        validate_handler_name("has.dot")
