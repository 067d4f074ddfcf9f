"""
In command: invokes the function with a payload and stores the result.
"""
import base64
import json
from typing import Any, Dict, Optional
from lambda_resource.commands.base import LambdaCommand, timestamp
from lambda_resource.concourse.context import CommandContext
from lambda_resource.concourse.response import CommandResponse
from lambda_resource.exceptions import ConfigurationError, FunctionError, ResourceError
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface
from lambda_resource.models import InParams, InRequest, parse_request
from lambda_resource.utils.logger import logger

RESULT_FILE = 'result.json'
RESULT_PAYLOAD_FILE = 'result.payload.json'

class InCommand(LambdaCommand):
    def handle_command(self,
                       ctx: CommandContext,
                       request: Dict[str, Any]) -> CommandResponse:
        """Invoke the function and persist its result
        Args:
            ctx: the command context
            request: the decoded in request
        Return:
            a response versioned by the invocation time
        """
        cmd = parse_request(InRequest, request)
        alias = cmd.params.alias or cmd.source.alias

        payload = self.payload_data(ctx, cmd.params)
        result = self.invoke_function(self.client(cmd.source), cmd.source.function_name, alias, payload)
        logger.info('[SUCCESS] successfully invoked function')

        self.persist_result(ctx, result)

        version = {'timestamp': timestamp()}
        if alias:
            version['alias'] = alias
        response = CommandResponse(version=version)
        if result.get('StatusCode') is not None:
            response.add_meta('status_code', result['StatusCode'])
        if result.get('ExecutedVersion'):
            response.add_meta('executed_version', result['ExecutedVersion'])
        return response

    def payload_data(self, ctx: CommandContext, params: InParams) -> bytes:
        """Return the invoke payload from inline JSON or a payload file"""
        if not params.has_payload():
            raise ConfigurationError('no payload or payload_file given, the function was not invoked')

        if params.payload is not None:
            return json.dumps(params.payload).encode('utf-8')

        path = ctx.resolve(params.payload_file)
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ConfigurationError(f'failed to read payload file "{path}" ({e})') from e

    def invoke_function(self,
                        api: LambdaFunctionInterface,
                        func_name: str,
                        alias: Optional[str],
                        payload: bytes) -> Dict[str, Any]:
        """Invoke name[:alias], raising FunctionError if the function itself failed
        Args:
            api: the Lambda API
            func_name: the function name
            alias: the qualifier, if any
            payload: the raw payload
        Return:
            the invoke response
        """
        if alias:
            func_name = f'{func_name}:{alias}'

        result = api.invoke(func_name, payload)

        kind = result.get('FunctionError')
        if kind:
            raise self._function_error(kind, result.get('Payload') or b'')
        return result

    def persist_result(self, ctx: CommandContext, result: Dict[str, Any]) -> None:
        """Write result.json and result.payload.json to the output directory"""
        payload = result.get('Payload') or b''
        summary = {
            'StatusCode': result.get('StatusCode'),
            'ExecutedVersion': result.get('ExecutedVersion'),
            'FunctionError': result.get('FunctionError'),
            'LogResult': result.get('LogResult'),
            'Payload': base64.b64encode(payload).decode('ascii'),
        }
        ctx.json(RESULT_FILE, summary)
        ctx.file(RESULT_PAYLOAD_FILE, payload)

    def _function_error(self, kind: str, payload: bytes) -> ResourceError:
        try:
            body = json.loads(payload)
        except ValueError as e:
            return ResourceError(f'failed to decode function error {kind!r} ({e})')
        if not isinstance(body, dict):
            return ResourceError(f'failed to decode function error {kind!r}: {body!r}')

        stack_trace = body.get('stackTrace') or []
        if isinstance(stack_trace, str):
            stack_trace = [stack_trace]
        error = FunctionError(kind=kind,
                              message=str(body.get('errorMessage', '')),
                              error_type=body.get('errorType'),
                              stack_trace=[str(line) for line in stack_trace])
        logger.error(f'[FAIL] {error}')
        return error
