"""
Entry point for the check, in and out resource scripts.

All three console scripts run main(); the script name (argv[0]) selects
the command, as with /opt/resource/{check,in,out} in a resource image.
"""
import sys
from typing import List, Optional
from pydantic import ValidationError
from lambda_resource.commands.check import CheckCommand
from lambda_resource.commands.invoke import InCommand
from lambda_resource.commands.publish import OutCommand
from lambda_resource.concourse.context import CommandContext, Resource
from lambda_resource.config import ResourceConfig
from lambda_resource.managers.lambda_manager import LambdaManager
from lambda_resource.models import Source
from lambda_resource.utils.logger import configure_logger, logger


def build_resource(config: ResourceConfig) -> Resource:
    """Wire the three commands to a boto3-backed Lambda client"""
    def client_factory(source: Source) -> LambdaManager:
        return LambdaManager.from_source(source, endpoint_url=config.ENDPOINT_URL)

    return Resource(check=CheckCommand(client_factory),
                    in_=InCommand(client_factory),
                    out=OutCommand(client_factory))


def main(argv: Optional[List[str]] = None) -> int:
    ctx = CommandContext(argv if argv is not None else sys.argv, sys.stdin, sys.stdout, sys.stderr)
    try:
        config = ResourceConfig()
    except ValidationError as e:
        configure_logger(ctx.log)
        logger.error(f'[FAIL] invalid resource configuration ({e})')
        return 1
    configure_logger(ctx.log, config.LOG_LEVEL)
    return ctx.handle(build_resource(config))


if __name__ == "__main__":
    sys.exit(main())
