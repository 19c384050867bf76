from typing import Optional

from ape.api import PluginConfig
from pydantic import field_validator
from pydantic_settings import SettingsConfigDict

from .types import NetworkProfile, validate_compiler_version

DEFAULT_SOLIDITY_VERSION = "0.8.17"
DEPLOYER_KEY = "DEPLOYER_PRIVATE_KEY"


def default_networks() -> dict[str, NetworkProfile]:
    return {
        "m1": NetworkProfile(
            url="https://mevm.devnet.m1.movementlabs.xyz",
            chain_id=336,
            accounts=[DEPLOYER_KEY],
        ),
        "bsctest": NetworkProfile(
            url="https://public.stackup.sh/api/v1/node/bsc-testnet",
            chain_id=97,
            accounts=[DEPLOYER_KEY],
            gas_price=6 * 10**9,
            gas_limit=6 * 10**6,
        ),
    }


class CompetitionConfig(PluginConfig):
    solidity: str = DEFAULT_SOLIDITY_VERSION
    """Solidity compiler version. Must satisfy the pragma of every compiled source."""

    networks: dict[str, NetworkProfile] = default_networks()
    """Network profiles by name."""

    default_network: Optional[str] = None
    """Profile used by ``ape competition deploy`` when ``--network`` is not given."""

    modules_folder: str = "deployments"
    """Project folder scanned for deployment modules."""

    model_config = SettingsConfigDict(env_prefix="APE_COMPETITION_")

    @field_validator("solidity")
    @classmethod
    def validate_solidity(cls, value: str) -> str:
        return validate_compiler_version(value)
