import importlib.util
import sys
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any, Optional

from ape.logging import logger

from .exceptions import ModuleDefinitionError, UnknownModuleError
from .types import AccountRef, ArgumentType, ContractDeployment, ContractFuture


class DeploymentModule:
    """
    An inert deployment plan. Nothing happens until the plan is handed to a
    :class:`~ape_competition.runner.DeploymentRunner`.
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[ContractDeployment],
        bindings: dict[str, ContractFuture],
        submodules: Sequence["DeploymentModule"] = (),
    ):
        self.name = name
        self.steps = tuple(steps)
        self.bindings = dict(bindings)
        self.submodules = tuple(submodules)

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} {self.name}>"

    def __getattr__(self, name: str) -> ContractFuture:
        # NOTE: Lets other modules write `module.factory` for a binding.
        if not name.startswith("_") and name in self.__dict__.get("bindings", {}):
            return self.bindings[name]

        raise AttributeError(name)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, DeploymentModule)
            and self.name == other.name
            and self.steps == other.steps
            and self.bindings == other.bindings
        )

    def __hash__(self) -> int:
        return hash(self.name)


class ModuleBuilder:
    """The ``m`` object handed to a module's builder function."""

    def __init__(self, module_name: str):
        self.module_name = module_name
        self._steps: list[ContractDeployment] = []
        self._submodules: list[DeploymentModule] = []

    def get_account(self, index: int) -> AccountRef:
        return AccountRef(index=index)

    def contract(
        self, contract_name: str, args: Sequence[ArgumentType] = (), id: Optional[str] = None
    ) -> ContractFuture:
        future_id = f"{self.module_name}#{id or contract_name}"
        if any(step.future_id == future_id for step in self._steps):
            raise ModuleDefinitionError(
                f"Duplicate step '{future_id}'. Pass a unique `id=` to deploy "
                f"'{contract_name}' more than once."
            )

        for arg in args:
            if isinstance(arg, ContractFuture) and arg.module_name == self.module_name:
                if not any(step.future_id == arg.future_id for step in self._steps):
                    raise ModuleDefinitionError(
                        f"'{future_id}' depends on '{arg.future_id}' which is not "
                        "an earlier step of this module."
                    )

        self._steps.append(
            ContractDeployment(
                future_id=future_id, contract_name=contract_name, constructor_args=list(args)
            )
        )
        return ContractFuture(
            module_name=self.module_name, future_id=future_id, contract_name=contract_name
        )

    def use_module(self, module: DeploymentModule) -> dict[str, ContractFuture]:
        if module.name == self.module_name:
            raise ModuleDefinitionError(f"Module '{module.name}' cannot use itself.")

        if module not in self._submodules:
            self._submodules.append(module)

        return dict(module.bindings)


def build_module(
    name: str, builder: Callable[[ModuleBuilder], Optional[dict[str, ContractFuture]]]
) -> DeploymentModule:
    """
    Describe a deployment module.

    Args:
        name (str): Unique module name, also the key used to skip re-deployment.
        builder (Callable): Receives a :class:`~ape_competition.modules.ModuleBuilder`
          and returns the module's named outputs.

    Returns:
        :class:`~ape_competition.modules.DeploymentModule`
    """
    if not name or "#" in name:
        raise ModuleDefinitionError(f"Invalid module name '{name}'.")

    m = ModuleBuilder(name)
    bindings = builder(m) or {}
    for binding, future in bindings.items():
        if not isinstance(future, ContractFuture):
            raise ModuleDefinitionError(
                f"Module '{name}' binding '{binding}' is not a contract future."
            )

    return DeploymentModule(name, m._steps, bindings, submodules=m._submodules)


class ModuleRegistry:
    def __init__(self):
        self._modules: dict[str, DeploymentModule] = {}
        self._aliases: dict[str, str] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._modules or name in self._aliases

    def __iter__(self) -> Iterator[DeploymentModule]:
        yield from self._modules.values()

    @property
    def names(self) -> list[str]:
        return sorted(self._modules)

    def register(self, module: DeploymentModule, deprecated_aliases: Sequence[str] = ()):
        if (existing := self._modules.get(module.name)) is not None and existing != module:
            raise ModuleDefinitionError(f"Module '{module.name}' is already defined.")

        self._modules[module.name] = module
        for alias in deprecated_aliases:
            self._aliases[alias] = module.name

    def get(self, name: str) -> DeploymentModule:
        if name in self._modules:
            return self._modules[name]

        elif canonical_name := self._aliases.get(name):
            logger.warning(
                f"Module name '{name}' is deprecated, use '{canonical_name}' instead."
            )
            return self._modules[canonical_name]

        raise UnknownModuleError(name, self.names)

    def load_folder(self, folder: Path) -> list[DeploymentModule]:
        """
        Import every ``*.py`` file in ``folder`` and register the modules it defines.
        """
        loaded: list[DeploymentModule] = []
        if not folder.is_dir():
            return loaded

        for path in sorted(folder.glob("*.py")):
            if path.name.startswith("_"):
                continue

            import_name = f"ape_competition_deployments.{path.stem}"
            spec = importlib.util.spec_from_file_location(import_name, path)
            if spec is None or spec.loader is None:
                continue

            py_module = importlib.util.module_from_spec(spec)
            sys.modules[import_name] = py_module
            try:
                spec.loader.exec_module(py_module)
            except Exception as err:
                raise ModuleDefinitionError(f"Failed to load '{path}': {err}") from err

            for value in vars(py_module).values():
                if isinstance(value, DeploymentModule):
                    self.register(value)
                    loaded.append(value)

        logger.debug(f"Loaded {len(loaded)} deployment module(s) from '{folder}'.")
        return loaded


registry = ModuleRegistry()
_builtins_registered = False


def _register_builtin_modules():
    global _builtins_registered
    if _builtins_registered:
        return

    from .factory import DEPRECATED_ALIASES, CompetitionFactoryModule

    registry.register(CompetitionFactoryModule, deprecated_aliases=DEPRECATED_ALIASES)
    _builtins_registered = True


def get_module(name: str) -> DeploymentModule:
    _register_builtin_modules()
    return registry.get(name)


def module_names() -> list[str]:
    _register_builtin_modules()
    return registry.names


def load_modules(folder: Path) -> list[DeploymentModule]:
    _register_builtin_modules()
    return registry.load_folder(folder)
