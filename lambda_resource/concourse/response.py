"""
Command response models.

What gets returned to Concourse (JSON on stdout) when a command completes.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

# Arbitrary version info identifying one state of the resource
ResourceVersion = Dict[str, str]


class CommandResponseMetadata(BaseModel):
    """A metadata entry shown next to the version in the pipeline UI."""

    name: str
    value: str


class CommandResponse(BaseModel):
    """
    Response of a command handler.

    check fills versions (ascending, newest last); in and out fill version.
    Only versions is written for check, and never for in/out.
    """

    version: ResourceVersion = Field(default_factory=dict)
    versions: List[ResourceVersion] = Field(default_factory=list, exclude=True)
    metadata: List[CommandResponseMetadata] = Field(default_factory=list)

    def add_meta(self, name: str, value: Any) -> None:
        """Append a metadata entry."""
        self.metadata.append(CommandResponseMetadata(name=name, value=str(value)))

    def check_output(self) -> List[ResourceVersion]:
        """The body written for check."""
        return [dict(v) for v in self.versions]

    def output(self) -> Dict[str, Any]:
        """The body written for in and out."""
        return self.model_dump()
