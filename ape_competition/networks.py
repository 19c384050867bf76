from typing import TYPE_CHECKING, Any, Optional, cast

from ape.logging import logger
from ape.utils import ManagerAccessMixin
from pydantic import BaseModel, ConfigDict, Field

from .accounts import DeployerAccount, normalize_private_key
from .exceptions import ArgumentResolutionError, UnknownNetworkError
from .types import NetworkProfile
from .vault import SecretVault

if TYPE_CHECKING:
    from .config import CompetitionConfig


class ConnectionDescriptor(BaseModel):
    """A network profile with its credentials resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    chain_id: int
    accounts: list[DeployerAccount] = Field(repr=False)
    gas_price: Optional[int] = None
    gas_limit: Optional[int] = None

    @property
    def deployer(self) -> DeployerAccount:
        return self.accounts[0]

    def get_account(self, index: int, module_name: str) -> DeployerAccount:
        if index >= len(self.accounts):
            raise ArgumentResolutionError(
                module_name,
                f"account #{index} requested but network '{self.name}' "
                f"has {len(self.accounts)} account(s).",
            )

        return self.accounts[index]

    @property
    def txn_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.gas_price is not None:
            kwargs["gas_price"] = self.gas_price

        if self.gas_limit is not None:
            kwargs["gas_limit"] = self.gas_limit

        return kwargs


class NetworkConfigurationProvider:
    """
    Resolved network profiles. Every secret referenced by a profile is read
    from the vault once, when the provider is loaded, and shared by all
    profiles referencing it.
    """

    def __init__(
        self,
        profiles: dict[str, NetworkProfile],
        solidity: str,
        secrets: dict[str, str],
    ):
        self._profiles = profiles
        self.solidity = solidity
        self._secrets = secrets

    @classmethod
    def load(
        cls, config: "CompetitionConfig", vault: Optional[SecretVault] = None
    ) -> "NetworkConfigurationProvider":
        vault = vault or SecretVault()
        secrets: dict[str, str] = {}
        for profile in config.networks.values():
            for secret_name in profile.accounts:
                if secret_name not in secrets:
                    secrets[secret_name] = normalize_private_key(vault.get(secret_name))

        logger.debug(f"Resolved {len(secrets)} secret(s) for {len(config.networks)} network(s).")
        return cls(dict(config.networks), config.solidity, secrets)

    @property
    def network_names(self) -> list[str]:
        return list(self._profiles)

    def get_profile(self, name: str) -> NetworkProfile:
        if name not in self._profiles:
            raise UnknownNetworkError(name, self.network_names)

        return self._profiles[name]

    def resolve(self, name: str) -> ConnectionDescriptor:
        """
        Get the fully-resolved connection descriptor for a network.

        Raises:
            :class:`~ape_competition.exceptions.UnknownNetworkError`: When
              ``name`` is not a known profile.

        Args:
            name (str): The network profile name.

        Returns:
            :class:`~ape_competition.networks.ConnectionDescriptor`
        """
        profile = self.get_profile(name)
        return ConnectionDescriptor(
            name=name,
            url=profile.url,
            chain_id=profile.chain_id,
            accounts=[
                DeployerAccount(secret_name=secret_name, private_key=self._secrets[secret_name])
                for secret_name in profile.accounts
            ],
            gas_price=profile.gas_price,
            gas_limit=profile.gas_limit,
        )


_network_provider: Optional[NetworkConfigurationProvider] = None


def get_network_provider(
    config: Optional["CompetitionConfig"] = None, vault: Optional[SecretVault] = None
) -> NetworkConfigurationProvider:
    """
    The process-wide provider. Loaded on first use, from ``config`` or the
    ``competition`` section of the Ape config, and reused afterwards.
    """
    global _network_provider
    if _network_provider is None:
        if config is None:
            from .config import CompetitionConfig

            config = cast(
                CompetitionConfig, ManagerAccessMixin.config_manager.get_config("competition")
            )

        _network_provider = NetworkConfigurationProvider.load(config, vault=vault)

    return _network_provider


def clear_network_provider():
    global _network_provider
    _network_provider = None
