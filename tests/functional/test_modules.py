import pytest
from ape.logging import logger

from ape_competition.exceptions import ModuleDefinitionError, UnknownModuleError
from ape_competition.factory import CompetitionFactoryModule
from ape_competition.modules import ModuleRegistry, build_module, get_module, module_names
from ape_competition.types import AccountRef, ContractFuture


def test_competition_factory_module():
    module = CompetitionFactoryModule
    assert module.name == "CompetitionFactoryModule"
    assert len(module.steps) == 1

    step = module.steps[0]
    assert step.future_id == "CompetitionFactoryModule#CompetitionFactory"
    assert step.contract_name == "CompetitionFactory"
    assert step.constructor_args == [AccountRef(index=0)]

    assert list(module.bindings) == ["factory"]
    assert module.factory == ContractFuture(
        module_name="CompetitionFactoryModule",
        future_id="CompetitionFactoryModule#CompetitionFactory",
        contract_name="CompetitionFactory",
    )
    assert module.submodules == ()


def test_get_module():
    assert get_module("CompetitionFactoryModule") is CompetitionFactoryModule
    assert "CompetitionFactoryModule" in module_names()


def test_get_module_deprecated_alias(monkeypatch):
    warnings: list[str] = []
    monkeypatch.setattr(logger, "warning", warnings.append)

    assert get_module("Factory") is CompetitionFactoryModule
    assert warnings == [
        "Module name 'Factory' is deprecated, use 'CompetitionFactoryModule' instead."
    ]


def test_get_unknown_module():
    with pytest.raises(UnknownModuleError, match="'Nope' not found"):
        get_module("Nope")


def test_build_module_has_no_side_effects():
    calls = []

    def builder(m):
        calls.append(m)
        return {"token": m.contract("Token", ["Name", 18])}

    module = build_module("TokenModule", builder)
    assert len(calls) == 1
    assert module.steps[0].constructor_args == ["Name", 18]


def test_duplicate_step():
    def builder(m):
        m.contract("Token")
        m.contract("Token")

    with pytest.raises(ModuleDefinitionError, match="Duplicate step"):
        build_module("TokenModule", builder)


def test_duplicate_step_with_id():
    def builder(m):
        return {"a": m.contract("Token"), "b": m.contract("Token", id="Token2")}

    module = build_module("TokenModule", builder)
    assert [s.future_id for s in module.steps] == ["TokenModule#Token", "TokenModule#Token2"]


def test_binding_not_a_future():
    with pytest.raises(ModuleDefinitionError, match="not a contract future"):
        build_module("BadModule", lambda m: {"deployer": m.get_account(0)})


@pytest.mark.parametrize("name", ["", "Bad#Name"])
def test_invalid_module_name(name):
    with pytest.raises(ModuleDefinitionError, match="Invalid module name"):
        build_module(name, lambda m: None)


def test_use_module():
    def builder(m):
        factory = m.use_module(CompetitionFactoryModule)["factory"]
        return {"registry": m.contract("Registry", [factory])}

    module = build_module("RegistryModule", builder)
    assert module.submodules == (CompetitionFactoryModule,)
    assert module.steps[0].constructor_args == [CompetitionFactoryModule.factory]


def test_registry_conflict():
    registry = ModuleRegistry()
    registry.register(build_module("Mod", lambda m: {"a": m.contract("A")}))
    # NOTE: Registering the same plan twice is fine.
    registry.register(build_module("Mod", lambda m: {"a": m.contract("A")}))

    with pytest.raises(ModuleDefinitionError, match="already defined"):
        registry.register(build_module("Mod", lambda m: {"b": m.contract("B")}))


def test_load_folder(tmp_path):
    (tmp_path / "registry.py").write_text(
        """
from ape_competition import CompetitionFactoryModule, build_module


def _registry(m):
    factory = m.use_module(CompetitionFactoryModule)["factory"]
    return {"registry": m.contract("Registry", [factory, m.get_account(0)])}


RegistryModule = build_module("RegistryModule", _registry)
"""
    )
    (tmp_path / "_helpers.py").write_text("raise RuntimeError('not loaded')")

    registry = ModuleRegistry()
    loaded = registry.load_folder(tmp_path)
    # NOTE: Imported modules are registered too.
    assert {m.name for m in loaded} == {"RegistryModule", "CompetitionFactoryModule"}
    assert registry.get("RegistryModule").submodules[0].name == "CompetitionFactoryModule"


def test_load_folder_missing(tmp_path):
    assert ModuleRegistry().load_folder(tmp_path / "deployments") == []


def test_load_folder_error(tmp_path):
    (tmp_path / "broken.py").write_text("raise RuntimeError('boom')")
    with pytest.raises(ModuleDefinitionError, match="boom"):
        ModuleRegistry().load_folder(tmp_path)
