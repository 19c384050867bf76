from pathlib import Path
from typing import Optional

import click
from ape.cli import skip_confirmation_option

from ape_competition._cli.click_ext import (
    CompetitionCliContext,
    competition_cli_ctx,
    network_name_option,
)
from ape_competition.exceptions import CompetitionDeployException, UnknownNetworkError


def _select_network(cli_ctx: CompetitionCliContext, network_name: Optional[str]) -> str:
    config = cli_ctx.competition_config
    if network_name:
        return network_name

    elif config.default_network:
        return config.default_network

    elif len(config.networks) == 1:
        return next(iter(config.networks))

    options = ", ".join(config.networks)
    raise click.MissingParameter(
        message=f"Must specify one of '{options}'.", param_hint="--network"
    )


@click.command()
@competition_cli_ctx()
@network_name_option
@click.argument("module_name")
def deploy(cli_ctx: CompetitionCliContext, network_name, module_name):
    """
    Deploy MODULE_NAME to a network, unless already deployed there
    """
    from ape_competition.modules import get_module, load_modules
    from ape_competition.networks import get_network_provider
    from ape_competition.runner import DeploymentRunner

    network_name = _select_network(cli_ctx, network_name)
    if network_name not in (networks := cli_ctx.competition_config.networks):
        # NOTE: Fail before the secret vault is read.
        cli_ctx.abort(str(UnknownNetworkError(network_name, list(networks))))

    try:
        load_modules(Path.cwd() / cli_ctx.competition_config.modules_folder)
        module = get_module(module_name)
        provider = get_network_provider(cli_ctx.competition_config, vault=cli_ctx.vault)
        descriptor = provider.resolve(network_name)
        result = DeploymentRunner(descriptor, store=cli_ctx.store).execute(module)
    except CompetitionDeployException as err:
        cli_ctx.abort(str(err))

    for binding, contract in result.contracts.items():
        click.echo(f"{result.module_name}.{binding}: {contract.address} ({contract.txn_hash})")


@click.group()
def deployments():
    """
    View recorded deployments
    """


@deployments.command("list")
@competition_cli_ctx()
@network_name_option
def _list(cli_ctx: CompetitionCliContext, network_name):
    """List recorded deployments"""
    if not (results := list(cli_ctx.store.results(network=network_name))):
        cli_ctx.logger.warning("No deployments found.")
        return

    for result in results:
        click.echo(f"{result.network}: {result.module_name}")
        for binding, contract in result.contracts.items():
            click.echo(f"  {binding} ({contract.contract_name}): {contract.address}")


@deployments.command()
@competition_cli_ctx()
@network_name_option
@click.argument("module_name")
@skip_confirmation_option()
def forget(cli_ctx: CompetitionCliContext, network_name, module_name, skip_confirmation):
    """
    Forget the recorded deployment of MODULE_NAME so it runs again
    """
    network_name = _select_network(cli_ctx, network_name)
    if (network_name, module_name) not in cli_ctx.store:
        cli_ctx.abort(f"No deployment of '{module_name}' recorded on '{network_name}'.")

    if skip_confirmation or click.confirm(f"Forget '{module_name}' on '{network_name}'"):
        cli_ctx.store.delete(network_name, module_name)
        cli_ctx.logger.success(f"Forgot '{module_name}' on '{network_name}'.")
