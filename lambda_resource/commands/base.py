"""
Shared plumbing for the check, in and out commands.
"""
import time
from typing import Callable, Optional
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface
from lambda_resource.managers.lambda_manager import LambdaManager
from lambda_resource.models import Source

ClientFactory = Callable[[Source], LambdaFunctionInterface]

class LambdaCommand:
    def __init__(self, client_factory: Optional[ClientFactory] = None):
        """Initialize shared command resources
        Args:
            client_factory: builds the Lambda API client for a source; defaults to boto3
        """
        self.client_factory = client_factory or LambdaManager.from_source

    def client(self, source: Source) -> LambdaFunctionInterface:
        return self.client_factory(source)


def timestamp() -> str:
    """Current Unix time, used as the version when nothing versioned changed"""
    return str(int(time.time()))
