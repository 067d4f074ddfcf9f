"""
Request models.

Defines the JSON bodies Concourse sends on stdin for check, in and out
as Pydantic models.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from lambda_resource.exceptions import ConfigurationError

# Published Lambda versions are plain non-negative integers
VERSION_PATTERN = re.compile(r"[0-9]+")
LATEST_VERSION = "$LATEST"

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_version_number(value: Optional[str]) -> int:
    """Parse a published version string, raising ConfigurationError if it is not one."""
    if value is None or value == "":
        raise ConfigurationError("empty version string")
    if not isinstance(value, str) or not VERSION_PATTERN.fullmatch(value):
        raise ConfigurationError(f"{value!r} is not a valid version integer")
    return int(value)


def parse_request(model: Type[ModelT], request: Dict[str, Any]) -> ModelT:
    """Validate a decoded request body, turning validation errors into ConfigurationError."""
    try:
        return model.model_validate(request)
    except ValidationError as e:
        raise ConfigurationError(f"invalid {model.__name__}: {e}") from e


class Source(BaseModel):
    """Resource source definition: which function, and how to reach it."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str
    region_name: str
    function_name: str
    # Tracks a specific alias of the function in check and in
    alias: Optional[str] = None


@dataclass(frozen=True)
class CodeSource:
    """The one code form given to a put."""

    ZIP_FILE: ClassVar[str] = "zip_file"
    CODE_DIR: ClassVar[str] = "code_dir"
    CODE_FILE: ClassVar[str] = "code_file"

    kind: str
    path: str


class InParams(BaseModel):
    """Params used when get:ing the resource (invoking the function)."""

    # Inline JSON payload; serialized verbatim
    payload: Any = None
    payload_file: Optional[str] = None
    alias: Optional[str] = None

    @model_validator(mode="after")
    def _single_payload(self) -> "InParams":
        if self.payload is not None and self.payload_file is not None:
            raise ValueError("only one of payload and payload_file may be set")
        return self

    def has_payload(self) -> bool:
        return self.payload is not None or self.payload_file is not None


class PutParams(BaseModel):
    """Params used when put:ing the resource (publishing code or tagging a version)."""

    zip_file: Optional[str] = None
    code_dir: Optional[str] = None
    code_file: Optional[str] = None
    # Tags the published (or given) version, e.g. "PROD" or "TEST"
    alias: Optional[str] = None
    # Tags a specific version without updating the function code
    version: Optional[str] = None
    version_file: Optional[str] = None

    @model_validator(mode="after")
    def _single_variants(self) -> "PutParams":
        given = [kind for kind in (CodeSource.ZIP_FILE, CodeSource.CODE_DIR, CodeSource.CODE_FILE)
                 if getattr(self, kind) is not None]
        if len(given) > 1:
            raise ValueError(f"only one code source may be set, got {', '.join(given)}")
        if self.version is not None and self.version_file is not None:
            raise ValueError("only one of version and version_file may be set")
        return self

    @property
    def code_source(self) -> Optional[CodeSource]:
        for kind in (CodeSource.ZIP_FILE, CodeSource.CODE_DIR, CodeSource.CODE_FILE):
            path = getattr(self, kind)
            if path is not None:
                return CodeSource(kind=kind, path=path)
        return None


class CheckRequest(BaseModel):
    source: Source
    # Baseline: the version Concourse last saw, absent on the first check
    version: Optional[Dict[str, str]] = None


class InRequest(BaseModel):
    source: Source
    version: Optional[Dict[str, str]] = None
    params: InParams = Field(default_factory=InParams)

    @field_validator("params", mode="before")
    @classmethod
    def params_default(cls, value: Any) -> Any:
        return {} if value is None else value


class OutRequest(BaseModel):
    source: Source
    params: PutParams = Field(default_factory=PutParams)

    @field_validator("params", mode="before")
    @classmethod
    def params_default(cls, value: Any) -> Any:
        return {} if value is None else value
