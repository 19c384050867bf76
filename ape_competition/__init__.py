from importlib import import_module
from typing import Any

from ape import plugins


@plugins.register(plugins.Config)
def config_class():
    from .config import CompetitionConfig

    return CompetitionConfig


def __getattr__(name: str) -> Any:
    if name in ("DeploymentModule", "ModuleBuilder", "build_module", "get_module"):
        return getattr(import_module("ape_competition.modules"), name)

    elif name == "CompetitionFactoryModule":
        return getattr(import_module("ape_competition.factory"), name)

    elif name in ("DeploymentRunner",):
        return getattr(import_module("ape_competition.runner"), name)

    elif name in ("get_network_provider", "NetworkConfigurationProvider"):
        return getattr(import_module("ape_competition.networks"), name)

    else:
        raise AttributeError(name)


__all__ = [
    "CompetitionFactoryModule",
    "DeploymentModule",
    "DeploymentRunner",
    "ModuleBuilder",
    "NetworkConfigurationProvider",
    "build_module",
    "get_module",
    "get_network_provider",
]
