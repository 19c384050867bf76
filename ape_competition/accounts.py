from typing import Any, Optional

from ape.api import AccountAPI, TransactionAPI
from ape.types import AddressType, MessageSignature, TransactionSignature
from eth_account import Account as EthAccount
from eth_account.messages import SignableMessage, encode_defunct
from eth_utils import add_0x_prefix, to_bytes
from pydantic import Field

from .exceptions import ConfigurationError


def normalize_private_key(key: str) -> str:
    key = add_0x_prefix(key.strip())  # type: ignore[arg-type]
    try:
        EthAccount.from_key(key)
    except Exception as err:
        # NOTE: Do not include the key in the message.
        raise ConfigurationError("Malformed private key.") from err

    return key


class DeployerAccount(AccountAPI):
    """
    In-memory signer for a private key resolved from the secret vault.
    """

    secret_name: str
    private_key: str = Field(repr=False, exclude=True)

    @property
    def alias(self) -> str:
        return self.secret_name.lower()

    @property
    def address(self) -> AddressType:
        return EthAccount.from_key(self.private_key).address

    def sign_message(self, msg: Any, **signer_options) -> Optional[MessageSignature]:
        if isinstance(msg, str):
            msg = encode_defunct(text=msg)

        elif isinstance(msg, bytes):
            msg = encode_defunct(primitive=msg)

        if not isinstance(msg, SignableMessage):
            return None

        signed_msg = EthAccount.sign_message(msg, self.private_key)
        return MessageSignature(
            v=signed_msg.v,
            r=to_bytes(signed_msg.r),
            s=to_bytes(signed_msg.s),
        )

    def sign_transaction(self, txn: TransactionAPI, **signer_options) -> Optional[TransactionAPI]:
        # NOTE: Using JSON mode, as only primitive types can be signed.
        tx_data = txn.model_dump(mode="json", by_alias=True, exclude={"sender"})
        signature = EthAccount.sign_transaction(tx_data, self.private_key)
        txn.signature = TransactionSignature(
            v=signature.v,
            r=to_bytes(signature.r),
            s=to_bytes(signature.s),
        )
        return txn
