"""
Shared test helpers: a scripted Lambda API double and context builders.
"""
import io
import json
import os
import tempfile
from typing import Any, Dict, List, Optional
from lambda_resource.concourse.context import CommandContext
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface

SOURCE = {
    "access_key_id": "testing",
    "secret_access_key": "testing",
    "region_name": "us-east-1",
    "function_name": "TestFunction",
}

class FakeLambdaClient(LambdaFunctionInterface):
    """Returns scripted responses and records every call"""
    def __init__(self,
                 pages: Optional[List[List[Dict[str, Any]]]] = None,
                 configuration: Optional[Dict[str, Any]] = None,
                 code_config: Optional[Dict[str, Any]] = None,
                 alias_config: Optional[Dict[str, Any]] = None,
                 invoke_result: Optional[Dict[str, Any]] = None,
                 errors: Optional[Dict[str, Exception]] = None):
        self.pages = pages or [[]]
        self.configuration = configuration or {}
        self.code_config = code_config or {}
        self.alias_config = alias_config or {}
        self.invoke_result = invoke_result or {}
        self.errors = errors or {}
        self.calls = []

    def _call(self, operation: str, *args) -> None:
        self.calls.append((operation,) + args)
        if operation in self.errors:
            raise self.errors[operation]

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]

    def list_versions_by_function(self, func_name, marker=None):
        self._call('list_versions_by_function', func_name, marker)
        index = int(marker) if marker else 0
        page = {'Versions': self.pages[index]}
        if index + 1 < len(self.pages):
            page['NextMarker'] = str(index + 1)
        return page

    def get_function_configuration(self, func_name, qualifier=None):
        self._call('get_function_configuration', func_name, qualifier)
        return dict(self.configuration)

    def update_function_code(self, func_name, zip_bytes, publish=True):
        self._call('update_function_code', func_name, zip_bytes, publish)
        return dict(self.code_config)

    def update_alias(self, func_name, alias, version):
        self._call('update_alias', func_name, alias, version)
        return dict(self.alias_config, Name=alias, FunctionVersion=version)

    def invoke(self, func_name, payload):
        self._call('invoke', func_name, payload)
        return dict(self.invoke_result)


def versions(*numbers: str) -> List[Dict[str, Any]]:
    """Version records as list_versions_by_function returns them"""
    return [{'Version': n, 'CodeSha256': f'sha-{n}'} for n in numbers]


def make_context(command: str,
                 request: Any = None,
                 directory: Optional[str] = None,
                 raw: Optional[str] = None) -> CommandContext:
    """Build a context for /opt/resource/<command> reading request from stdin"""
    args = [os.path.join('/opt/resource', command)]
    if directory:
        args.append(directory)
    body = raw if raw is not None else json.dumps(request if request is not None else {})
    return CommandContext(args, io.StringIO(body), io.StringIO(), io.StringIO())


class TempDirMixin:
    def setUp(self):
        """Set up an output directory"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.directory = self.temp_dir.name

    def tearDown(self):
        """Clean up the output directory"""
        self.temp_dir.cleanup()

    def read(self, name: str, mode: str = 'r'):
        with open(os.path.join(self.directory, name), mode) as f:
            return f.read()

    def write(self, name: str, data: str) -> str:
        path = os.path.join(self.directory, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            f.write(data)
        return path
