"""
Custom exception classes.

Every error a command handler raises derives from ResourceError; the
command context treats any of them as fatal to the process.
"""
from typing import List, Optional


class ResourceError(Exception):
    """Base exception class for the resource commands."""

    pass


class ConfigurationError(ResourceError):
    """Raised when the request, params or a version string are invalid."""

    pass


class LambdaAPIError(ResourceError):
    """Raised when a Lambda management API call cannot be made."""

    def __init__(self, operation: str, function_name: str, cause: Exception):
        self.operation = operation
        self.function_name = function_name
        self.cause = cause
        super().__init__(f"{operation} failed for {function_name}: {cause}")


class AliasUpdateError(LambdaAPIError):
    """Raised when retargeting an alias fails after other work succeeded.

    partial_response holds the response built before the failure, so a
    successful code publish is still reported.
    """

    def __init__(self, function_name: str, alias: str, version: str,
                 cause: Exception, partial_response=None):
        self.alias = alias
        self.version = version
        self.partial_response = partial_response
        super().__init__(f"update_alias {alias} -> {version}", function_name, cause)


class FunctionError(ResourceError):
    """Raised when the invoked function itself failed.

    kind is Lambda's function error flag ('Handled' or 'Unhandled'),
    error_type is the runtime's exception name.
    """

    HANDLED = "Handled"
    UNHANDLED = "Unhandled"

    def __init__(self, kind: str, message: str,
                 error_type: Optional[str] = None,
                 stack_trace: Optional[List[str]] = None):
        self.kind = kind
        self.message = message
        self.error_type = error_type
        self.stack_trace = list(stack_trace or [])
        super().__init__(
            f"function failed to run because of a {kind!r} error: "
            f"{message!r} ({error_type}), {self.stack_trace}"
        )


class OutputError(ResourceError):
    """Raised when a file cannot be written to the output directory."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to write data to {path}: {cause}")
