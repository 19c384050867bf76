import click

from ape_competition._cli.click_ext import CompetitionCliContext, competition_cli_ctx
from ape_competition.exceptions import CompetitionDeployException


@click.group(name="vars")
def _vars():
    """
    Manage secrets, such as the deployer's private key
    """


@_vars.command("set")
@competition_cli_ctx()
@click.argument("name")
@click.option("--value", prompt=True, hide_input=True, help="Secret value (prompted if omitted)")
def _set(cli_ctx: CompetitionCliContext, name, value):
    """Store secret NAME"""
    try:
        cli_ctx.vault.set(name, value)
    except CompetitionDeployException as err:
        cli_ctx.abort(str(err))

    cli_ctx.logger.success(f"Secret '{name}' stored.")


@_vars.command("get")
@competition_cli_ctx()
@click.argument("name")
def get(cli_ctx: CompetitionCliContext, name):
    """Print secret NAME"""
    try:
        value = cli_ctx.vault.get(name)
    except CompetitionDeployException as err:
        cli_ctx.abort(str(err))

    click.echo(value)


@_vars.command("list")
@competition_cli_ctx()
def _list(cli_ctx: CompetitionCliContext):
    """List stored secret names"""
    if not (names := list(cli_ctx.vault.names)):
        cli_ctx.logger.warning("No secrets stored.")
        return

    for name in names:
        click.echo(name)


@_vars.command()
@competition_cli_ctx()
@click.argument("name")
def delete(cli_ctx: CompetitionCliContext, name):
    """Delete secret NAME"""
    if cli_ctx.vault.delete(name):
        cli_ctx.logger.success(f"Secret '{name}' deleted.")

    else:
        cli_ctx.logger.warning(f"Secret '{name}' not found.")
