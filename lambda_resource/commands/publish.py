"""
Out command: publishes new function code and/or points an alias at a version.
"""
from typing import Any, Dict, Optional
from lambda_resource.commands.base import ClientFactory, LambdaCommand, timestamp
from lambda_resource.concourse.context import CommandContext
from lambda_resource.concourse.response import CommandResponse
from lambda_resource.exceptions import AliasUpdateError, ConfigurationError, LambdaAPIError
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface
from lambda_resource.managers.deployment_manager import LambdaDeploymentManager
from lambda_resource.models import CodeSource, OutRequest, PutParams, parse_request, parse_version_number
from lambda_resource.utils.logger import logger

FUNCTION_FILE = 'function.json'
VERSION_FILE = 'version'
ALIAS_FILE = 'alias.json'

class OutCommand(LambdaCommand):
    def __init__(self,
                 client_factory: Optional[ClientFactory] = None,
                 deployment: Optional[LambdaDeploymentManager] = None):
        """Initialize put resources
        Args:
            client_factory: builds the Lambda API client for a source
            deployment: builds deployment packages from the code params
        """
        super().__init__(client_factory)
        self.deployment = deployment or LambdaDeploymentManager()

    def handle_command(self,
                       ctx: CommandContext,
                       request: Dict[str, Any]) -> CommandResponse:
        """Publish code and/or tag a version with an alias
        Args:
            ctx: the command context
            request: the decoded out request
        Return:
            a response with the published or tagged version
        """
        cmd = parse_request(OutRequest, request)
        params = cmd.params
        func_name = cmd.source.function_name

        # Validated before any API call
        version = self.resolve_version(ctx, params)
        code_source = params.code_source
        api = self.client(cmd.source)

        response = CommandResponse()
        if code_source is not None:
            data = self.deployment.package(CodeSource(kind=code_source.kind,
                                                      path=ctx.resolve(code_source.path)))
            config = api.update_function_code(func_name, data, publish=True)

            if version is not None and version != config.get('Version'):
                logger.warning(f'[WARNING] ignoring version {version}, '
                               f'tagging the published version {config.get("Version")} instead')
            version = config.get('Version')
            try:
                parse_version_number(version)
            except ConfigurationError as e:
                raise ConfigurationError(f'could not parse the published function version ({e})') from e

            ctx.json(FUNCTION_FILE, _without_metadata(config))
            ctx.file(VERSION_FILE, version)

            response.version = {'version': version}
            response.add_meta('arn', config.get('FunctionArn', ''))
            response.add_meta('runtime', config.get('Runtime', ''))
            response.add_meta('timeout', config.get('Timeout', ''))
            response.add_meta('memory', config.get('MemorySize', ''))
            if config.get('CodeSha256'):
                response.add_meta('code_sha256', config['CodeSha256'])
        elif version is not None:
            response.version = {'version': version}
        else:
            response.version = {'timestamp': timestamp()}

        if params.alias and version is not None:
            self.tag_version(ctx, api, func_name, params.alias, version, response)

        return response

    def resolve_version(self, ctx: CommandContext, params: PutParams) -> Optional[str]:
        """Return the explicit version from version or version_file, if any
        Raises:
            ConfigurationError: the version is empty or not an integer
        """
        version = params.version
        if params.version_file is not None:
            path = ctx.resolve(params.version_file)
            try:
                with open(path, 'rb') as f:
                    version = f.read().decode('utf-8').rstrip('\r\n')
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigurationError(f'failed to read version file "{path}" ({e})') from e

        if version is not None:
            parse_version_number(version)
        return version

    def tag_version(self,
                    ctx: CommandContext,
                    api: LambdaFunctionInterface,
                    func_name: str,
                    alias: str,
                    version: str,
                    response: CommandResponse) -> None:
        """Point the alias at version and record it in the response
        Raises:
            AliasUpdateError: carrying the response built so far
        """
        try:
            alias_config = api.update_alias(func_name, alias, version)
        except LambdaAPIError as e:
            raise AliasUpdateError(func_name, alias, version, e.cause, partial_response=response) from e

        ctx.json(ALIAS_FILE, _without_metadata(alias_config))

        response.version = dict(response.version, alias=alias)


def _without_metadata(response: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in response.items() if key != 'ResponseMetadata'}
