"""
Blockchain Exceptions
Errors raised by encoders, the in-memory protocol model and deployments
"""


class ContractRevertError(ValueError):
    """
    Raised where the contract being mirrored would revert

    The message is the exact revert string the contract uses, so tests can
    assert on it the same way for local models and live nodes.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArtifactNotFoundError(FileNotFoundError):
    """Compiled contract artifact missing from the artifacts directory"""


class LibraryLinkError(ValueError):
    """Bytecode still references a library that was not supplied"""


class DeploymentError(RuntimeError):
    """Deployment transaction was mined but failed"""


class RPCError(RuntimeError):
    """JSON-RPC request answered with an error object"""

    def __init__(self, method: str, error: dict):
        super().__init__(f"{method} failed: {error.get('message', error)}")
        self.method = method
        self.error = error
