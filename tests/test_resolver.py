import json
import os.path
from collections import OrderedDict

import pytest

from cqrs_message_bus.primitives.exceptions import MiddlewareError, ResolutionError
from cqrs_message_bus.resolver import ImportResolver, import_object


class NeedsArgument:
    def __init__(self, value: int) -> None:
        self.value = value


def test_import_object_dotted_function() -> None:
    assert import_object("json.dumps") is json.dumps


def test_import_object_nested_module() -> None:
    assert import_object("os.path.join") is os.path.join


def test_import_object_colon_form() -> None:
    assert import_object("collections:OrderedDict.fromkeys") == OrderedDict.fromkeys


def test_import_object_module_only() -> None:
    assert import_object("json") is json


def test_import_object_missing_attribute_raises() -> None:
    with pytest.raises(AttributeError):
        import_object("json.not_there")


def test_import_object_missing_module_raises() -> None:
    with pytest.raises(ImportError):
        import_object("cqrs_message_bus_missing_module.Thing")


def test_resolve_instantiates_classes() -> None:
    resolved = ImportResolver().resolve("collections.OrderedDict")

    assert isinstance(resolved, OrderedDict)


def test_resolve_class_object_gives_fresh_instance() -> None:
    resolver = ImportResolver()

    first = resolver.resolve(OrderedDict)
    second = resolver.resolve(OrderedDict)

    assert isinstance(first, OrderedDict)
    assert first is not second


def test_resolve_returns_non_class_objects_as_is() -> None:
    assert ImportResolver().resolve("json.dumps") is json.dumps


def test_bound_instances_take_precedence() -> None:
    instance = object()
    resolver = ImportResolver({"json.dumps": instance})

    assert resolver.resolve("json.dumps") is instance


def test_bind_by_class_is_keyed_by_qualified_name() -> None:
    instance = NeedsArgument(3)
    resolver = ImportResolver()
    resolver.bind(NeedsArgument, instance)

    assert resolver.resolve(NeedsArgument) is instance
    assert resolver.resolve(f"{__name__}.NeedsArgument") is instance


def test_unimportable_reference_raises_resolution_error() -> None:
    with pytest.raises(ResolutionError) as exc:
        ImportResolver().resolve("cqrs_message_bus_missing_module.Thing")

    assert exc.value.reference == "cqrs_message_bus_missing_module.Thing"
    assert isinstance(exc.value, MiddlewareError)


def test_class_requiring_arguments_raises_resolution_error() -> None:
    with pytest.raises(ResolutionError, match="NeedsArgument"):
        ImportResolver().resolve(NeedsArgument)
