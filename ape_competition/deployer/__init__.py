from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from ape.logging import logger
from ape.utils import ManagerAccessMixin
from eth_utils import to_hex

from ape_competition.deployer.base import BaseDeployer
from ape_competition.deployer.mock import MockDeployer
from ape_competition.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ape.api import AccountAPI
    from ape.contracts import ContractContainer
    from ape.types import AddressType

    from ape_competition.networks import ConnectionDescriptor


class ApeDeployer(BaseDeployer, ManagerAccessMixin):
    """Deploys contracts compiled in the local Ape project."""

    @contextmanager
    def connect(self, descriptor: "ConnectionDescriptor"):
        logger.info(f"Connecting to '{descriptor.name}' ({descriptor.url}).")
        with self.network_manager.parse_network_choice(descriptor.url):
            yield

    def get_container(self, contract_name: str) -> "ContractContainer":
        try:
            return getattr(self.local_project, contract_name)
        except AttributeError as err:
            raise ConfigurationError(
                f"Contract '{contract_name}' not found in project. Is it compiled?"
            ) from err

    def deploy(
        self, contract_name: str, args: list[Any], sender: "AccountAPI", **txn_kwargs
    ) -> tuple["AddressType", str]:
        container = self.get_container(contract_name)
        instance = sender.deploy(container, *args, **txn_kwargs)
        txn_hash = instance.txn_hash
        if isinstance(txn_hash, bytes):
            txn_hash = to_hex(txn_hash)

        return instance.address, str(txn_hash)


__all__ = [
    "ApeDeployer",
    "BaseDeployer",
    "MockDeployer",
]
