import click

from ape_competition._cli.click_ext import CompetitionCliContext, competition_cli_ctx


@click.group()
def networks():
    """
    View network profiles
    """


@networks.command("list")
@competition_cli_ctx()
def _list(cli_ctx: CompetitionCliContext):
    """List network profiles"""
    config = cli_ctx.competition_config
    click.echo(f"solidity: {config.solidity}")
    for name, profile in config.networks.items():
        extras = [f"chain ID: {profile.chain_id}"]
        if profile.gas_price is not None:
            extras.append(f"gas price: {profile.gas_price}")

        if profile.gas_limit is not None:
            extras.append(f"gas limit: {profile.gas_limit}")

        default = " (default)" if name == config.default_network else ""
        click.echo(f"  {name}{default}: {profile.url} ({', '.join(extras)})")
