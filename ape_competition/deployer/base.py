from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ape.api import AccountAPI
    from ape.types import AddressType

    from ape_competition.networks import ConnectionDescriptor


class BaseDeployer(ABC):
    """Submits contract-creation transactions for the deployment runner."""

    @abstractmethod
    def connect(self, descriptor: "ConnectionDescriptor") -> AbstractContextManager: ...

    @abstractmethod
    def deploy(
        self, contract_name: str, args: list[Any], sender: "AccountAPI", **txn_kwargs
    ) -> tuple["AddressType", str]:
        """
        Deploy ``contract_name`` and wait for confirmation.

        Returns:
            tuple[AddressType, str]: The contract address and transaction hash.
        """
