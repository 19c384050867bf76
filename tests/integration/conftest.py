import pytest
from click.testing import CliRunner

from ape_competition._cli import cli as competition_cli
from ape_competition._cli.click_ext import CompetitionCliContext
from ape_competition.deployer import MockDeployer


# NOTE: Every test gets a different data folder
@pytest.fixture(scope="function", autouse=True)
def patch_cli_context(monkeypatch, tmp_path, config):
    monkeypatch.setattr(CompetitionCliContext, "data_folder", tmp_path)
    monkeypatch.setattr(CompetitionCliContext, "competition_config", config)


@pytest.fixture
def mock_deployments(monkeypatch):
    deployers: list[MockDeployer] = []

    def create_deployer():
        deployer = MockDeployer()
        deployers.append(deployer)
        return deployer

    monkeypatch.setattr("ape_competition.runner.ApeDeployer", create_deployer)
    return deployers


@pytest.fixture
def runner(patch_cli_context):
    # NOTE: ape's pytest plugin reorders fixtures, so depend on the patch explicitly.
    yield CliRunner()


@pytest.fixture
def cli():
    return competition_cli


@pytest.fixture
def deployer_key(runner, cli, PRIVATE_KEY):
    result = runner.invoke(
        cli, ("vars", "set", "DEPLOYER_PRIVATE_KEY", "--value", PRIVATE_KEY), catch_exceptions=False
    )
    assert result.exit_code == 0, result.output
    return PRIVATE_KEY
