import click

from ape_competition._cli.deployments import deploy, deployments
from ape_competition._cli.networks import networks
from ape_competition._cli.vars import _vars


@click.group(short_help="Deploy the CompetitionFactory contracts")
def cli():
    """
    Command-line helper for deploying modules to the configured networks
    and managing the secrets they need.
    """


cli.add_command(deploy)
cli.add_command(deployments)
cli.add_command(networks)
cli.add_command(_vars)
