from typing import Optional

from ape.exceptions import ApeException, ConfigError
from ape.exceptions import TransactionError as ApeTransactionError


class CompetitionDeployException(ApeException):
    pass


class ConfigurationError(CompetitionDeployException, ConfigError):
    """
    Raised when a network profile, the compiler setting or a secret
    cannot be resolved. Always raised before any network call.
    """


class UnknownNetworkError(ConfigurationError):
    def __init__(self, network: str, options: Optional[list[str]] = None):
        message = f"Unknown network '{network}'."
        if options:
            message = f"{message} Options: {', '.join(options)}."

        super().__init__(message)


class SecretNotFoundError(ConfigurationError):
    def __init__(self, name: str):
        super().__init__(
            f"Secret '{name}' not found. Set it using `ape competition vars set {name}`."
        )


class ModuleDefinitionError(CompetitionDeployException):
    pass


class UnknownModuleError(ModuleDefinitionError):
    def __init__(self, name: str, options: Optional[list[str]] = None):
        message = f"Deployment module '{name}' not found."
        if options:
            message = f"{message} Options: {', '.join(options)}."

        super().__init__(message)


class ArgumentResolutionError(CompetitionDeployException):
    def __init__(self, module_name: str, message: str):
        self.module_name = module_name
        super().__init__(f"Module '{module_name}': {message}")


class TransactionError(CompetitionDeployException, ApeTransactionError):
    def __init__(
        self, network: str, module_name: str, future_id: Optional[str], cause: Exception
    ):
        self.network = network
        self.module_name = module_name
        self.future_id = future_id
        self.cause = cause
        if future_id is None:
            message = f"Connecting to '{network}' for module '{module_name}' failed: {cause}"

        else:
            message = (
                f"Deploying '{future_id}' (module '{module_name}') on '{network}' failed: {cause}"
            )

        super().__init__(message)
