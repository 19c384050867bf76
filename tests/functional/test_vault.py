import os

import pytest

from ape_competition.accounts import DeployerAccount
from ape_competition.exceptions import ConfigurationError, SecretNotFoundError
from ape_competition.vault import SecretVault


def test_set_get(vault_path):
    vault = SecretVault(vault_path)
    vault.set("API_KEY", "abc")
    assert vault.has("API_KEY")
    assert vault.get("API_KEY") == "abc"
    assert list(vault.names) == ["API_KEY"]


def test_missing(vault_path):
    vault = SecretVault(vault_path)
    assert not vault.has("API_KEY")
    with pytest.raises(SecretNotFoundError):
        vault.get("API_KEY")


def test_env_override(vault_path, monkeypatch):
    vault = SecretVault(vault_path)
    vault.set("API_KEY", "from-file")
    monkeypatch.setenv("APE_COMPETITION_VAR_API_KEY", "from-env")
    assert vault.get("API_KEY") == "from-env"


def test_delete(vault_path):
    vault = SecretVault(vault_path)
    vault.set("API_KEY", "abc")
    assert vault.delete("API_KEY")
    assert not vault.delete("API_KEY")
    assert list(vault.names) == []


@pytest.mark.parametrize("name", ["", "1KEY", "MY-KEY", "MY KEY"])
def test_invalid_name(vault_path, name):
    with pytest.raises(ConfigurationError, match="Invalid secret name"):
        SecretVault(vault_path).set(name, "abc")


def test_empty_value(vault_path):
    with pytest.raises(ConfigurationError, match="cannot be empty"):
        SecretVault(vault_path).set("API_KEY", "")


def test_file_permissions(vault_path):
    SecretVault(vault_path).set("API_KEY", "abc")
    assert vault_path.stat().st_mode & 0o777 == 0o600


def test_file_permissions_with_open_umask(vault_path):
    previous = os.umask(0)
    try:
        vault = SecretVault(vault_path)
        vault.set("API_KEY", "abc")
        vault.set("OTHER_KEY", "def")
    finally:
        os.umask(previous)

    assert vault_path.stat().st_mode & 0o777 == 0o600
    assert not vault_path.with_suffix(".tmp").exists()


def test_deployer_account(PRIVATE_KEY, DEPLOYER):
    account = DeployerAccount(secret_name="DEPLOYER_PRIVATE_KEY", private_key=PRIVATE_KEY)
    assert account.address == DEPLOYER
    assert account.alias == "deployer_private_key"
    assert PRIVATE_KEY not in repr(account)
    assert "private_key" not in account.model_dump()


def test_deployer_account_sign_message(PRIVATE_KEY, DEPLOYER):
    from eth_account import Account as EthAccount
    from eth_account.messages import encode_defunct

    account = DeployerAccount(secret_name="DEPLOYER_PRIVATE_KEY", private_key=PRIVATE_KEY)
    signature = account.sign_message("hello")
    assert signature is not None

    signer = EthAccount.recover_message(
        encode_defunct(text="hello"), signature=signature.encode_rsv()
    )
    assert signer == DEPLOYER
