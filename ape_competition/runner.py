from typing import TYPE_CHECKING, Any, Optional

from ape.logging import logger

from .deployer import ApeDeployer, BaseDeployer
from .exceptions import ArgumentResolutionError, CompetitionDeployException, TransactionError
from .store import DeploymentStore
from .types import (
    AccountRef,
    ContractDeployment,
    ContractFuture,
    DeployedContract,
    DeploymentResult,
)

if TYPE_CHECKING:
    from .modules import DeploymentModule
    from .networks import ConnectionDescriptor


class DeploymentRunner:
    """
    Executes deployment modules against one network. A module that already has
    a recorded result on that network is not executed again.
    """

    def __init__(
        self,
        descriptor: "ConnectionDescriptor",
        store: Optional[DeploymentStore] = None,
        deployer: Optional[BaseDeployer] = None,
    ):
        self.descriptor = descriptor
        self.store = store or DeploymentStore()
        self.deployer = deployer or ApeDeployer()

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} network={self.descriptor.name}>"

    @property
    def network(self) -> str:
        return self.descriptor.name

    def execute(self, module: "DeploymentModule") -> DeploymentResult:
        """
        Deploy ``module`` unless it was already deployed on this network.

        Raises:
            :class:`~ape_competition.exceptions.ArgumentResolutionError`: When a
              constructor argument references an output that does not exist.
              Nothing is submitted in that case.
            :class:`~ape_competition.exceptions.TransactionError`: When submitting
              or confirming a deployment fails. Nothing is recorded.

        Args:
            module (:class:`~ape_competition.modules.DeploymentModule`): The plan.

        Returns:
            :class:`~ape_competition.types.DeploymentResult`
        """
        if (result := self.store.get(self.network, module.name)) is not None:
            logger.info(f"Module '{module.name}' already deployed on '{self.network}', skipping.")
            return result

        # NOTE: Check the whole module tree before any submodule sends a transaction.
        self._check_module(module, set())
        return self._execute(module)

    def _execute(self, module: "DeploymentModule") -> DeploymentResult:
        if (result := self.store.get(self.network, module.name)) is not None:
            logger.info(f"Module '{module.name}' already deployed on '{self.network}', skipping.")
            return result

        for submodule in module.submodules:
            self._execute(submodule)

        deployed: dict[str, DeployedContract] = {}
        if module.steps:
            try:
                network_ctx = self.deployer.connect(self.descriptor)
                network_ctx.__enter__()
            except CompetitionDeployException:
                raise

            except Exception as err:
                raise TransactionError(self.network, module.name, None, err) from err

            try:
                for step in module.steps:
                    deployed[step.future_id] = self._deploy_step(module.name, step, deployed)

            finally:
                network_ctx.__exit__(None, None, None)

        contracts: dict[str, DeployedContract] = {}
        for binding, future in module.bindings.items():
            if future.module_name == module.name:
                contracts[binding] = deployed[future.future_id]

            else:
                # Re-exported output of a submodule.
                contracts[binding] = self._get_external_future(module.name, future)

        result = DeploymentResult(
            network=self.network, module_name=module.name, contracts=contracts
        )
        self.store.record(result)
        for binding, contract in result.contracts.items():
            logger.success(
                f"'{module.name}.{binding}' ({contract.contract_name}) at {contract.address}"
            )

        return result

    def _deploy_step(
        self, module_name: str, step: ContractDeployment, deployed: dict[str, DeployedContract]
    ) -> DeployedContract:
        args = [self._resolve_argument(module_name, arg, deployed) for arg in step.constructor_args]
        logger.info(f"Deploying '{step.future_id}' on '{self.network}'.")
        try:
            address, txn_hash = self.deployer.deploy(
                step.contract_name,
                args,
                self.descriptor.deployer,
                **self.descriptor.txn_kwargs,
            )
        except CompetitionDeployException:
            raise

        except Exception as err:
            raise TransactionError(self.network, module_name, step.future_id, err) from err

        return DeployedContract(
            future_id=step.future_id,
            contract_name=step.contract_name,
            address=address,
            txn_hash=txn_hash,
        )

    def _check_module(self, module: "DeploymentModule", checked: set[str]):
        if module.name in checked or (self.network, module.name) in self.store:
            return

        checked.add(module.name)
        for submodule in module.submodules:
            self._check_module(submodule, checked)

        planned = self._planned_outputs(module)
        earlier: set[str] = set()
        for step in module.steps:
            for arg in step.constructor_args:
                self._check_argument(module.name, arg, earlier, planned)

            earlier.add(step.future_id)

        for future in module.bindings.values():
            self._check_argument(module.name, future, earlier, planned)

    def _planned_outputs(self, module: "DeploymentModule") -> set[str]:
        """Future IDs bound by the module's submodules, at any depth."""
        outputs: set[str] = set()
        seen: set[str] = set()
        pending = list(module.submodules)
        while pending:
            submodule = pending.pop()
            if submodule.name in seen:
                continue

            seen.add(submodule.name)
            outputs.update(future.future_id for future in submodule.bindings.values())
            pending.extend(submodule.submodules)

        return outputs

    def _check_argument(self, module_name: str, arg: Any, earlier: set[str], planned: set[str]):
        if isinstance(arg, AccountRef):
            self.descriptor.get_account(arg.index, module_name)

        elif isinstance(arg, ContractFuture):
            if arg.module_name == module_name:
                if arg.future_id not in earlier:
                    raise ArgumentResolutionError(
                        module_name, f"'{arg.future_id}' is not an earlier step of this module."
                    )

            elif arg.future_id not in planned:
                self._get_external_future(module_name, arg)

        elif isinstance(arg, (list, tuple)):
            for item in arg:
                self._check_argument(module_name, item, earlier, planned)

    def _get_external_future(self, module_name: str, future: ContractFuture) -> DeployedContract:
        result = self.store.get(self.network, future.module_name)
        if result is not None:
            for contract in result.contracts.values():
                if contract.future_id == future.future_id:
                    return contract

        raise ArgumentResolutionError(
            module_name,
            f"'{future.future_id}' has not been deployed on '{self.network}'.",
        )

    def _resolve_argument(
        self, module_name: str, arg: Any, deployed: dict[str, DeployedContract]
    ) -> Any:
        if isinstance(arg, AccountRef):
            return self.descriptor.get_account(arg.index, module_name).address

        elif isinstance(arg, ContractFuture):
            if arg.module_name != module_name:
                return self._get_external_future(module_name, arg).address

            elif arg.future_id not in deployed:
                raise ArgumentResolutionError(
                    module_name, f"'{arg.future_id}' is not an earlier step of this module."
                )

            return deployed[arg.future_id].address

        elif isinstance(arg, (list, tuple)):
            return type(arg)(self._resolve_argument(module_name, a, deployed) for a in arg)

        return arg
