import re
from typing import Any, Optional, Union

from ape.types import AddressType
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, field_validator

VARIABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class NetworkProfile(BaseModel):
    """Connection parameters for one named network."""

    url: str
    """RPC endpoint."""

    chain_id: int
    """Chain ID served at ``url`` (not verified against the endpoint)."""

    accounts: list[str] = ["DEPLOYER_PRIVATE_KEY"]
    """Names of the vault secrets holding the signing keys, in order."""

    gas_price: Optional[int] = None
    """Fixed gas price (wei). Leave unset to let the provider estimate it."""

    gas_limit: Optional[int] = None
    """Fixed gas limit per transaction."""

    @field_validator("accounts")
    @classmethod
    def validate_account_names(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("A network profile needs at least one account.")

        for name in value:
            if not VARIABLE_NAME_PATTERN.match(name):
                raise ValueError(f"Invalid secret name '{name}'.")

        return value


def validate_compiler_version(value: str) -> str:
    try:
        Version(value)
    except InvalidVersion as err:
        raise ValueError(f"Invalid compiler version '{value}'.") from err

    return value


class AccountRef(BaseModel):
    """Placeholder for the network's account at ``index``."""

    index: int = Field(ge=0)

    def __repr__(self) -> str:
        return f"<AccountRef {self.index}>"


class ContractFuture(BaseModel):
    """Placeholder for the address of a contract deployed by a module step."""

    module_name: str
    future_id: str
    contract_name: str

    def __repr__(self) -> str:
        return f"<ContractFuture {self.future_id}>"


ArgumentType = Union[AccountRef, ContractFuture, Any]


class ContractDeployment(BaseModel):
    future_id: str
    """Unique identifier of this step, ``<module>#<contract>``."""

    contract_name: str
    constructor_args: list[ArgumentType] = []


class DeployedContract(BaseModel):
    future_id: str
    contract_name: str
    address: AddressType
    txn_hash: str


class DeploymentResult(BaseModel):
    """Model for recorded deployments under ``~/.ape/competition/deployments/``"""

    network: str
    module_name: str

    contracts: dict[str, DeployedContract] = {}
    """Deployed contracts by binding name."""

    def _single(self) -> DeployedContract:
        if len(self.contracts) != 1:
            raise ValueError(
                f"Module '{self.module_name}' has {len(self.contracts)} bindings, "
                "look them up in `.contracts`."
            )

        return next(iter(self.contracts.values()))

    @property
    def contract_address(self) -> AddressType:
        return self._single().address

    @property
    def transaction_hash(self) -> str:
        return self._single().txn_hash
