"""
Defines the interface to the Amazon Lambda management API used by the resource.

Function Manager:
1. List Versions By Function
2. Get Function Configuration
3. Update Function Code
4. Update Alias
5. Invoke
"""
from typing import Protocol, Dict, Optional, Any

class LambdaFunctionInterface(Protocol):
    def list_versions_by_function(self,
                                  func_name: str,
                                  marker: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def get_function_configuration(self,
                                   func_name: str,
                                   qualifier: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def update_function_code(self,
                             func_name: str,
                             zip_bytes: bytes,
                             publish: bool = True) -> Dict[str, Any]:
        raise NotImplementedError

    def update_alias(self,
                     func_name: str,
                     alias: str,
                     version: str) -> Dict[str, Any]:
        raise NotImplementedError

    def invoke(self,
               func_name: str,
               payload: bytes) -> Dict[str, Any]:
        raise NotImplementedError
