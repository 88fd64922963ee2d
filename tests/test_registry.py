from __future__ import annotations

import pytest

from smatch.adapters import TabContextLoader
from smatch.config.errors import ConfigurationError
from smatch.config.settings import ComponentSettings
from smatch.domain.capabilities import Capability
from smatch.registry import ComponentRegistry, registry, resolve_reference


def test_builtin_components_are_registered() -> None:
    assert registry.names(Capability.LOAD_CONTEXT) == ("list", "tab", "xml")
    assert "minimal" in registry.names(Capability.FILTER)


def test_create_passes_options_to_factory() -> None:
    component = registry.create(
        Capability.LOAD_CONTEXT,
        ComponentSettings(component="tab", options={"encoding": "latin-1"}),
    )

    assert isinstance(component, TabContextLoader)
    assert component.encoding == "latin-1"


def test_module_reference_is_imported_late() -> None:
    component = ComponentRegistry().create(
        Capability.ONLINE,
        ComponentSettings(component="smatch.adapters.lexical:LexicalMatcher"),
    )

    assert type(component).__name__ == "LexicalMatcher"


def test_resolve_reference_requires_module_and_attribute() -> None:
    with pytest.raises(ValueError, match="expected 'module:attr'"):
        resolve_reference("smatch.adapters.lexical:")


@pytest.mark.parametrize(
    "reference",
    ["nonexistent", "smatch.missing_module:Factory", "smatch.adapters.lexical:Missing"],
)
def test_unresolvable_components_are_configuration_errors(reference: str) -> None:
    with pytest.raises(ConfigurationError):
        registry.resolve(Capability.ONLINE, reference)


def test_factory_failures_are_configuration_errors() -> None:
    with pytest.raises(ConfigurationError, match="Cannot create"):
        registry.create(
            Capability.LOAD_CONTEXT,
            ComponentSettings(component="tab", options={"unknown": True}),
        )


def test_component_must_implement_the_capability_port() -> None:
    local = ComponentRegistry()
    local.register(Capability.FILTER, "broken", object)

    with pytest.raises(ConfigurationError, match="does not implement MappingFilter"):
        local.create(Capability.FILTER, ComponentSettings(component="broken"))


def test_register_rejects_a_different_factory_under_the_same_name() -> None:
    local = ComponentRegistry()
    local.register(Capability.FILTER, "one", object)

    with pytest.raises(ValueError, match="already registered"):
        local.register(Capability.FILTER, "one", dict)


def test_register_works_as_decorator() -> None:
    local = ComponentRegistry()

    @local.register(Capability.ONLINE, "decorated")
    class DecoratedMatcher:
        def match(self, source: object, target: object) -> object:
            return (source, target)

    assert local.names(Capability.ONLINE) == ("decorated",)
    local.unregister(Capability.ONLINE, "decorated")
    assert local.names(Capability.ONLINE) == ()
    assert DecoratedMatcher().match(1, 2) == (1, 2)
