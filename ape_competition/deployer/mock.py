from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional

from cchecksum import to_checksum_address
from eth_utils import keccak, to_hex

from ape_competition.deployer.base import BaseDeployer

if TYPE_CHECKING:
    from ape.api import AccountAPI
    from ape.types import AddressType

    from ape_competition.networks import ConnectionDescriptor


class MockDeployer(BaseDeployer):
    """
    Records deployments instead of sending them. Addresses are derived from
    the sender and a per-sender nonce, so they are stable across runs.
    """

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.deployments: list[dict[str, Any]] = []
        self.connected_to: list[str] = []
        self._nonces: dict["AddressType", int] = {}

    @contextmanager
    def connect(self, descriptor: "ConnectionDescriptor"):
        self.connected_to.append(descriptor.name)
        yield

    def deploy(
        self, contract_name: str, args: list[Any], sender: "AccountAPI", **txn_kwargs
    ) -> tuple["AddressType", str]:
        if contract_name == self.fail_on:
            raise RuntimeError(f"Constructor of '{contract_name}' reverted.")

        nonce = self._nonces.get(sender.address, 0)
        self._nonces[sender.address] = nonce + 1
        seed = f"{sender.address}:{nonce}".encode()
        address = to_checksum_address(to_hex(keccak(seed)[-20:]))
        txn_hash = to_hex(keccak(b"txn:" + seed))
        self.deployments.append(
            {
                "contract_name": contract_name,
                "args": args,
                "sender": sender.address,
                "txn_kwargs": txn_kwargs,
                "address": address,
                "txn_hash": txn_hash,
            }
        )
        return address, txn_hash
