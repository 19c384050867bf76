from pathlib import Path
from typing import TYPE_CHECKING, cast

import click
from ape.cli import ApeCliContextObject, ape_cli_context

if TYPE_CHECKING:
    # perf: Keep the CLI module loading fast as possible.
    from ape_competition.config import CompetitionConfig
    from ape_competition.store import DeploymentStore
    from ape_competition.vault import SecretVault


class CompetitionCliContext(ApeCliContextObject):
    @property
    def competition_config(self) -> "CompetitionConfig":
        from ape_competition.config import CompetitionConfig

        return cast(CompetitionConfig, self.config_manager.get_config("competition"))

    @property
    def data_folder(self) -> Path:
        from ape_competition.vault import get_data_folder

        return get_data_folder()

    @property
    def vault(self) -> "SecretVault":
        from ape_competition.vault import SecretVault

        return SecretVault(self.data_folder / "vars.json")

    @property
    def store(self) -> "DeploymentStore":
        from ape_competition.store import DeploymentStore

        return DeploymentStore(self.data_folder)


def competition_cli_ctx():
    return ape_cli_context(obj_type=CompetitionCliContext)


network_name_option = click.option(
    "--network", "network_name", help="Network profile name", default=None
)
