"""
Check command: discovers new published versions of a function, or a moved alias.
"""
from typing import Any, Dict, List, Optional, Tuple
from lambda_resource.commands.base import LambdaCommand
from lambda_resource.concourse.context import CommandContext
from lambda_resource.concourse.response import CommandResponse
from lambda_resource.exceptions import ConfigurationError
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface
from lambda_resource.models import LATEST_VERSION, CheckRequest, parse_request, parse_version_number
from lambda_resource.utils.logger import logger

class CheckCommand(LambdaCommand):
    def handle_command(self,
                       ctx: CommandContext,
                       request: Dict[str, Any]) -> CommandResponse:
        """Return the versions that are new since the baseline
        Args:
            ctx: the command context
            request: the decoded check request
        Return:
            a response whose versions are sorted ascending, newest last
        """
        cmd = parse_request(CheckRequest, request)
        baseline = self._baseline(cmd.version)
        api = self.client(cmd.source)

        if cmd.source.alias is None:
            found = self.published_versions(api, cmd.source.function_name, baseline)
            response = CommandResponse(versions=[{'version': str(n)} for n, _ in found])
        else:
            found = self.alias_version(api, cmd.source.function_name, cmd.source.alias, baseline)
            response = CommandResponse(versions=[{'version': str(n), 'alias': cmd.source.alias}
                                                 for n, _ in found])

        for number, code_sha in found:
            if code_sha:
                response.add_meta('code_sha256', f'{number}:{code_sha}')
        logger.info(f'[SUCCESS] found {len(found)} new version(s) of "{cmd.source.function_name}"')
        return response

    def published_versions(self,
                           api: LambdaFunctionInterface,
                           func_name: str,
                           baseline: Optional[int]) -> List[Tuple[int, Optional[str]]]:
        """Collect published versions newer than the baseline
        Args:
            api: the Lambda API
            func_name: the function name
            baseline: the last seen version number, or None on the first check
        Return:
            (version number, code sha256) pairs, ascending; only the newest one without a baseline
        """
        # Keyed by version number; a version listed on two pages is reported once
        found = {}
        marker = None
        while True:
            page = api.list_versions_by_function(func_name, marker=marker)
            for config in page.get('Versions', []):
                if config['Version'] == LATEST_VERSION:
                    continue
                number = parse_version_number(config['Version'])
                if baseline is None or number > baseline:
                    found.setdefault(number, config.get('CodeSha256'))
            marker = page.get('NextMarker')
            if not marker:
                break

        ordered = sorted(found.items())

        # First check: report only the current version, not the whole history
        if baseline is None:
            ordered = ordered[-1:]
        return ordered

    def alias_version(self,
                      api: LambdaFunctionInterface,
                      func_name: str,
                      alias: str,
                      baseline: Optional[int]) -> List[Tuple[int, Optional[str]]]:
        """Return the alias's version if it moved away from the baseline
        Args:
            api: the Lambda API
            func_name: the function name
            alias: the tracked alias
            baseline: the last seen version number, or None on the first check
        Return:
            zero or one (version number, code sha256) pair
        """
        config = api.get_function_configuration(func_name, qualifier=alias)
        try:
            number = parse_version_number(config.get('Version'))
        except ConfigurationError as e:
            raise ConfigurationError(f'could not parse the version of alias "{alias}" ({e})') from e

        if baseline is None or number != baseline:
            return [(number, config.get('CodeSha256'))]
        return []

    def _baseline(self, version: Optional[Dict[str, str]]) -> Optional[int]:
        if not version:
            return None
        try:
            return parse_version_number(version.get('version'))
        except ConfigurationError as e:
            raise ConfigurationError(f'invalid baseline version {version} ({e})') from e
