"""
NamespaceGate Pydantic models.

Defines namespace entries, resolution results, browse descriptors,
read chunks and the startup mounts configuration.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class NamespaceEntry(BaseModel):
    """A virtual name mapped onto a canonical real path."""
    virtual_name: str = Field(description="Name clients use in place of the real path")
    real_path: str = Field(description="Canonical, symlink-resolved absolute path")


class ResolutionStatus(str, Enum):
    """Outcome of resolving a virtual path."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ResolvedPath(BaseModel):
    """Transient result of Files.resolve()."""
    status: ResolutionStatus
    path: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, path: str) -> "ResolvedPath":
        return cls(status=ResolutionStatus.FOUND, path=path)

    @classmethod
    def not_found(cls) -> "ResolvedPath":
        return cls(status=ResolutionStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "ResolvedPath":
        return cls(status=ResolutionStatus.ERROR, error=error)

    @property
    def is_found(self) -> bool:
        return self.status == ResolutionStatus.FOUND

    @property
    def is_not_found(self) -> bool:
        return self.status == ResolutionStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status == ResolutionStatus.ERROR


class FileDescriptor(BaseModel):
    """One entry of a browse listing."""
    name: str = Field(description="Virtual path of the child")
    path: str = Field(description="Virtual path of the child")
    dir: bool
    size: int = 0
    mode: str = ""
    mtime: float = 0.0
    nlink: int = 0
    uid: int = 0
    gid: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")


class ReadChunk(BaseModel):
    """A partial read: the bytes at `offset`, decoded as UTF-8."""
    offset: int
    data: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")


class MountConfig(BaseModel):
    """A directory or file to attach on startup."""
    path: str = Field(description="Real filesystem path")
    name: str = Field(description="Virtual name to attach it under")


class MountsConfig(BaseModel):
    """Startup mounts configuration file."""
    mounts: List[MountConfig] = Field(default_factory=list)
