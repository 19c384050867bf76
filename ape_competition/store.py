from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from ape.logging import logger

from .types import DeploymentResult
from .vault import get_data_folder


class DeploymentStore:
    """
    Recorded deployment results, one JSON file per (network, module name).
    """

    def __init__(self, data_folder: Optional[Path] = None):
        self.data_folder = (data_folder or get_data_folder()) / "deployments"

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} {self.data_folder}>"

    def _get_path(self, network: str, module_name: str) -> Path:
        return self.data_folder / network / f"{module_name}.json"

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self._get_path(*key).is_file()

    def get(self, network: str, module_name: str) -> Optional[DeploymentResult]:
        if not (path := self._get_path(network, module_name)).is_file():
            return None

        return DeploymentResult.model_validate_json(path.read_text(encoding="utf-8"))

    def record(self, result: DeploymentResult):
        path = self._get_path(result.network, result.module_name)
        path.parent.mkdir(exist_ok=True, parents=True)

        # NOTE: Replace in one step so an interrupted write never leaves a partial result.
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        tmp_path.replace(path)
        logger.debug(f"Recorded '{result.module_name}' on '{result.network}' at '{path}'.")

    def results(self, network: Optional[str] = None) -> Iterator[DeploymentResult]:
        if not self.data_folder.is_dir():
            return

        networks = [network] if network else sorted(p.name for p in self.data_folder.iterdir())
        for network_name in networks:
            for path in sorted((self.data_folder / network_name).glob("*.json")):
                yield DeploymentResult.model_validate_json(path.read_text(encoding="utf-8"))

    def delete(self, network: str, module_name: str):
        """
        Forget a recorded result so the module runs again.
        **NOTE**: If the result does not exist, nothing happens.
        """
        self._get_path(network, module_name).unlink(missing_ok=True)
