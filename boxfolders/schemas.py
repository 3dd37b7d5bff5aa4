# schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Literal, Optional

SharedLinkAccess = Optional[Literal["open", "company", "collaborators"]]


class SharedLinkPermissions(BaseModel):
    """
    Actions allowed on a shared link. Only settable when access is open or company.
    """

    can_view: Optional[Literal[True]] = None
    can_download: Optional[bool] = None


class SharedLink(BaseModel):
    """
    The shared_link field of a folder update.

    Only the fields that were set are sent, so passing ``password=None``
    removes the password while leaving it out keeps the current one.
    Leaving ``access`` out uses the enterprise default level.
    """

    access: SharedLinkAccess = None
    password: Optional[str] = None
    # e.g. '2012-12-12T10:53:43-08:00'
    unshared_at: Optional[str] = None
    vanity_name: Optional[str] = None
    permissions: Optional[SharedLinkPermissions] = None

    def to_body(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MetadataPatchOperation(BaseModel):
    """A single JSON Patch operation against a metadata instance."""

    op: str
    path: str
    value: Any = None


class Watermark(BaseModel):
    # The API currently only supports the default imprint.
    model_config = ConfigDict(extra="allow")

    imprint: Any = "default"


class FolderReference(BaseModel):
    type: Literal["folder"] = "folder"
    id: str


class LockedOperations(BaseModel):
    move: bool = True
    delete: bool = True


class FolderLockRequest(BaseModel):
    folder: FolderReference
    locked_operations: LockedOperations = LockedOperations()
