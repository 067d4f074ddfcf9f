"""
Command context passed to the check, in and out commands.

Turns a process invocation (argv, stdin, stdout, stderr) into one
request/response cycle: the base name of argv[0] picks the command,
argv[1] (optional) is the directory output files are written to and
relative param paths are resolved against.
"""
import json
import os
from typing import IO, Any, Dict, List, Optional, Union
from lambda_resource.concourse.response import CommandResponse
from lambda_resource.exceptions import OutputError, ResourceError
from lambda_resource.interfaces.resource_interface import CommandHandler, ResourceHandler
from lambda_resource.utils.logger import logger

CHECK = 'check'
IN = 'in'
OUT = 'out'

# command name -> (handler getter, body written when the command has no handler)
COMMANDS = {
    CHECK: ('check_handler', '[]'),
    IN: ('in_handler', '{}'),
    OUT: ('out_handler', '{}'),
}

class Resource(ResourceHandler):
    def __init__(self,
                 check: Optional[CommandHandler] = None,
                 in_: Optional[CommandHandler] = None,
                 out: Optional[CommandHandler] = None):
        """Default resource implementation, one handler per command
        Args:
            check: the check handler
            in_: the get handler
            out: the put handler
        """
        self.check = check
        self.in_ = in_
        self.out = out

    def check_handler(self) -> Optional[CommandHandler]:
        return self.check

    def in_handler(self) -> Optional[CommandHandler]:
        return self.in_

    def out_handler(self) -> Optional[CommandHandler]:
        return self.out

class CommandContext:
    def __init__(self,
                 args: List[str],
                 stdin: IO[str],
                 stdout: IO[str],
                 log: IO[str]):
        """Initialize the context from the process invocation
        Args:
            args: the argument list, argv[0] included
            stdin: the request stream
            stdout: the response stream
            log: the diagnostics stream
        """
        self.command_name = os.path.basename(args[0]) if args else ''
        self.directory = args[1] if len(args) > 1 else ''
        self.stdin = stdin
        self.stdout = stdout
        self.log = log

    def handle(self, resource: Optional[ResourceHandler]) -> int:
        """Run the selected command
        Args:
            resource: provides the three command handlers
        Return:
            the process exit status
        """
        if self.command_name not in COMMANDS:
            logger.error(f'[FAIL] unknown command: "{self.command_name}"')
            return 1

        getter, empty_body = COMMANDS[self.command_name]
        handler = getattr(resource, getter)() if resource is not None else None
        if handler is None:
            logger.warning(f'[WARNING] the command "{self.command_name}" is not implemented')
            self._write(empty_body)
            return 0

        request = self._decode()

        if self.directory and not os.path.isdir(self.directory):
            logger.warning(f'[WARNING] the directory "{self.directory}" does not exist')

        try:
            response = handler.handle_command(self, request)
        except ResourceError as e:
            logger.error(f'[FAIL] failed to run command {self.command_name} ({e})')
            partial = getattr(e, 'partial_response', None)
            if partial is not None:
                logger.error(f'[FAIL] response before the failure: {json.dumps(partial.output())}')
            return 1

        # Encode fully before writing so a failure never leaves a partial body
        try:
            body = self.encode(response)
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f'[FAIL] failed to encode response ({e})')
            return 1

        self._write(body)
        return 0

    def encode(self, response: CommandResponse) -> str:
        """Serialize a response the way Concourse expects it for the current command"""
        if self.command_name == CHECK:
            return json.dumps(response.check_output())
        return json.dumps(response.output())

    def resolve(self, path: str) -> str:
        """Resolve a param path against the working directory"""
        if not self.directory or os.path.isabs(path):
            return path
        return os.path.join(self.directory, path)

    def json(self, name: str, obj: Any) -> str:
        """Encode and write out a JSON result in the output directory
        Args:
            name: the file name, relative to the output directory
            obj: a JSON-serializable object
        Return:
            the full path written
        """
        path = self.resolve(name)
        try:
            data = json.dumps(obj, default=str)
        except (TypeError, ValueError) as e:
            raise OutputError(path, e) from e
        return self.file(name, data)

    def file(self, name: str, data: Union[bytes, str]) -> str:
        """Write out a file in the output directory
        Args:
            name: the file name, relative to the output directory
            data: the file contents
        Return:
            the full path written
        """
        path = self.resolve(name)
        if isinstance(data, str):
            data = data.encode('utf-8')
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.error(f'[FAIL] cannot write "{path}" ({e})')
            raise OutputError(path, e) from e
        return path

    def _decode(self) -> Dict[str, Any]:
        # A malformed request is not fatal here; the handler's validation decides
        try:
            # Exactly one JSON value; anything after it is left unread
            request, _ = json.JSONDecoder().raw_decode(self.stdin.read().lstrip())
        except ValueError as e:
            logger.warning(f'[WARNING] failed to decode input json ({e})')
            return {}
        if not isinstance(request, dict):
            logger.warning(f'[WARNING] input json is a {type(request).__name__}, not an object')
            return {}
        return request

    def _write(self, body: str) -> None:
        self.stdout.write(body)
        self.stdout.write('\n')
        self.stdout.flush()
