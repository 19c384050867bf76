import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from ape.logging import logger
from ape.utils import ManagerAccessMixin

from .exceptions import ConfigurationError, SecretNotFoundError
from .types import VARIABLE_NAME_PATTERN

ENV_PREFIX = "APE_COMPETITION_VAR_"


def get_data_folder() -> Path:
    return ManagerAccessMixin.config_manager.DATA_FOLDER / "competition"


class SecretVault:
    """
    Named secrets stored outside of the project, in ``vars.json`` under the
    plugin's data folder. An environment variable ``APE_COMPETITION_VAR_<NAME>``
    takes precedence over the stored value.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_data_folder() / "vars.json"

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} {self.path}>"

    def _load(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as err:
            raise ConfigurationError(f"Secret vault '{self.path}' is corrupted.") from err

        return data.get("vars", {})

    def _save(self, secrets: dict[str, str]):
        self.path.parent.mkdir(exist_ok=True, parents=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.unlink(missing_ok=True)
        # NOTE: Secrets must never be readable by other users, not even briefly.
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
            json.dump({"vars": secrets}, tmp_file, indent=2)

        tmp_path.replace(self.path)

    @staticmethod
    def _validate_name(name: str):
        if not VARIABLE_NAME_PATTERN.match(name):
            raise ConfigurationError(
                f"Invalid secret name '{name}'. "
                "Names must start with a letter or underscore and contain only "
                "letters, digits and underscores."
            )

    @property
    def names(self) -> Iterator[str]:
        yield from sorted(self._load())

    def has(self, name: str) -> bool:
        return f"{ENV_PREFIX}{name}" in os.environ or name in self._load()

    def get(self, name: str) -> str:
        """
        Resolve a secret.

        Raises:
            :class:`~ape_competition.exceptions.SecretNotFoundError`: When neither
              the environment nor the vault file holds ``name``.

        Args:
            name (str): The secret's name.

        Returns:
            str: The secret value.
        """
        self._validate_name(name)
        if value := os.environ.get(f"{ENV_PREFIX}{name}"):
            logger.debug(f"Using secret '{name}' from the environment.")
            return value

        if (value := self._load().get(name)) is None:
            raise SecretNotFoundError(name)

        return value

    def set(self, name: str, value: str):
        self._validate_name(name)
        if not value:
            raise ConfigurationError("Secret value cannot be empty.")

        secrets = self._load()
        secrets[name] = value
        self._save(secrets)

    def delete(self, name: str) -> bool:
        """
        Delete a stored secret. Returns ``False`` if it did not exist.
        """
        secrets = self._load()
        if secrets.pop(name, None) is None:
            return False

        self._save(secrets)
        return True
