"""
Implement the Lambda functionalities used by the resource commands
"""
from typing import Dict, Optional, Any
import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from lambda_resource.exceptions import LambdaAPIError
from lambda_resource.interfaces.lambda_interface import LambdaFunctionInterface
from lambda_resource.models import Source
from lambda_resource.utils.logger import logger

class LambdaManager(LambdaFunctionInterface):
    def __init__(self, lambda_client: BaseClient):
        """Initialize Lambda function resources
        Args:
            lambda_client: the Lambda client, used to make calls to AWS
        """
        self.client = lambda_client

    @classmethod
    def from_source(cls,
                    source: Source,
                    endpoint_url: Optional[str] = None) -> 'LambdaManager':
        """Create a manager from the pipeline's source configuration
        Args:
            source: the resource source (static credentials and region)
            endpoint_url: optional override for the Lambda endpoint
        Return:
            a LambdaManager bound to a new boto3 Lambda client
        """
        client = boto3.client('lambda',
                              region_name=source.region_name,
                              aws_access_key_id=source.access_key_id,
                              aws_secret_access_key=source.secret_access_key,
                              endpoint_url=endpoint_url)
        return cls(client)

    def list_versions_by_function(self,
                                  func_name: str,
                                  marker: Optional[str] = None) -> Dict[str, Any]:
        """List one page of the versions of a function
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/lambda/client/list_versions_by_function.html
        Args:
            func_name: the function name
            marker: the NextMarker of the previous page, if any
        Return:
            the response, with 'Versions' and (when there are more pages) 'NextMarker'
        """
        kwargs = {'FunctionName': func_name}
        if marker:
            kwargs['Marker'] = marker
        try:
            return self.client.list_versions_by_function(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error(f'[FAIL] cannot list versions of "{func_name}" ({e})')
            raise LambdaAPIError('list_versions_by_function', func_name, e) from e

    def get_function_configuration(self,
                                   func_name: str,
                                   qualifier: Optional[str] = None) -> Dict[str, Any]:
        """Return the configuration of a function, optionally at an alias or version
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/lambda/client/get_function_configuration.html
        Args:
            func_name: the function name
            qualifier: an alias name or version number
        Return:
            the function configuration
        """
        kwargs = {'FunctionName': func_name}
        if qualifier:
            kwargs['Qualifier'] = qualifier
        try:
            return self.client.get_function_configuration(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error(f'[FAIL] cannot get configuration of "{func_name}" ({e})')
            raise LambdaAPIError('get_function_configuration', func_name, e) from e

    def update_function_code(self,
                             func_name: str,
                             zip_bytes: bytes,
                             publish: bool = True) -> Dict[str, Any]:
        """Upload new function code, publishing it as a new version
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/lambda/client/update_function_code.html
        Args:
            func_name: the function name
            zip_bytes: the deployment package
            publish: publish a new version after the update
        Return:
            the new function configuration (includes 'Version' and 'CodeSha256')
        """
        try:
            response = self.client.update_function_code(FunctionName=func_name,
                                                        ZipFile=zip_bytes,
                                                        Publish=publish)
        except (ClientError, BotoCoreError) as e:
            logger.error(f'[FAIL] cannot update code of "{func_name}" ({e})')
            raise LambdaAPIError('update_function_code', func_name, e) from e
        logger.info(f'[SUCCESS] updated "{func_name}" to version {response.get("Version")} '
                    f'(sha256: {response.get("CodeSha256")})')
        return response

    def update_alias(self,
                     func_name: str,
                     alias: str,
                     version: str) -> Dict[str, Any]:
        """Point an alias at a published version
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/lambda/client/update_alias.html
        Args:
            func_name: the function name
            alias: the alias name, e.g. 'PROD'
            version: the version the alias should point to
        Return:
            the alias configuration
        """
        try:
            response = self.client.update_alias(FunctionName=func_name,
                                                Name=alias,
                                                FunctionVersion=version)
        except (ClientError, BotoCoreError) as e:
            logger.error(f'[FAIL] cannot set alias "{alias}" of "{func_name}" to {version} ({e})')
            raise LambdaAPIError('update_alias', func_name, e) from e
        logger.info(f'[SUCCESS] set the alias "{alias}" to version {version}')
        return response

    def invoke(self,
               func_name: str,
               payload: bytes) -> Dict[str, Any]:
        """Invokes/calls Lambda function
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/lambda/client/invoke.html
        Args:
            func_name: the (optionally qualified) name of the Lambda function
            payload: the raw input to the function
        Returns:
            the invoke response, with 'Payload' read into bytes
        """
        try:
            response = self.client.invoke(FunctionName=func_name,
                                          Payload=payload)
            response['Payload'] = response['Payload'].read()
        except (ClientError, BotoCoreError) as e:
            logger.error(f'[FAIL] cannot invoke "{func_name}" ({e})')
            raise LambdaAPIError('invoke', func_name, e) from e
        logger.info(f'[SUCCESS] invoked "{func_name}"')
        return response
