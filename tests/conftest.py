import pytest

from ape_competition.config import DEPLOYER_KEY, CompetitionConfig
from ape_competition.deployer import MockDeployer
from ape_competition.networks import NetworkConfigurationProvider, clear_network_provider
from ape_competition.runner import DeploymentRunner
from ape_competition.store import DeploymentStore
from ape_competition.vault import SecretVault

# NOTE: Well-known development keys (Hardhat / Anvil accounts 0 and 1).
DEPLOYER_PRIVATE_KEY = "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
OTHER_PRIVATE_KEY = "59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
OTHER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


class CountingVault(SecretVault):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups: list[str] = []

    def get(self, name: str) -> str:
        self.lookups.append(name)
        return super().get(name)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (DEPLOYER_KEY, "OTHER_PRIVATE_KEY"):
        monkeypatch.delenv(f"APE_COMPETITION_VAR_{name}", raising=False)

    clear_network_provider()
    yield
    clear_network_provider()


@pytest.fixture
def vault_path(tmp_path):
    return tmp_path / "vars.json"


@pytest.fixture
def vault(vault_path):
    vault = CountingVault(vault_path)
    vault.set(DEPLOYER_KEY, DEPLOYER_PRIVATE_KEY)
    # NOTE: Only count lookups made by the code under test.
    vault.lookups.clear()
    return vault


@pytest.fixture
def config():
    return CompetitionConfig()


@pytest.fixture
def network_provider(config, vault):
    return NetworkConfigurationProvider.load(config, vault=vault)


@pytest.fixture(params=["m1", "bsctest"])
def network_name(request):
    return request.param


@pytest.fixture
def descriptor(network_provider, network_name):
    return network_provider.resolve(network_name)


@pytest.fixture
def store(tmp_path):
    return DeploymentStore(tmp_path)


@pytest.fixture
def mock_deployer():
    return MockDeployer()


@pytest.fixture
def runner(descriptor, store, mock_deployer):
    return DeploymentRunner(descriptor, store=store, deployer=mock_deployer)


@pytest.fixture(scope="session")
def PRIVATE_KEY():
    return DEPLOYER_PRIVATE_KEY


@pytest.fixture(scope="session")
def DEPLOYER():
    return DEPLOYER_ADDRESS


@pytest.fixture(scope="session")
def OTHER_KEY():
    return OTHER_PRIVATE_KEY


@pytest.fixture(scope="session")
def OTHER():
    return OTHER_ADDRESS


@pytest.fixture
def counting_vault(vault_path):
    return CountingVault(vault_path)
