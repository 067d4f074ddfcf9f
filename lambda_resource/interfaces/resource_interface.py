"""
Defines interfaces for the Concourse resource commands.

Command Handler:
1. Handle Command

Resource Handler:
1. Check Handler
2. In Handler
3. Out Handler
"""
from typing import Protocol, Dict, Optional, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from lambda_resource.concourse.context import CommandContext
    from lambda_resource.concourse.response import CommandResponse

class CommandHandler(Protocol):
    def handle_command(self,
                       ctx: 'CommandContext',
                       request: Dict[str, Any]) -> 'CommandResponse':
        raise NotImplementedError

class ResourceHandler(Protocol):
    def check_handler(self) -> Optional[CommandHandler]:
        raise NotImplementedError

    def in_handler(self) -> Optional[CommandHandler]:
        raise NotImplementedError

    def out_handler(self) -> Optional[CommandHandler]:
        raise NotImplementedError
