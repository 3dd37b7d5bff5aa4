# folders.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from .callbacks import supports_callback
from .exceptions import BoxAPIError, build_unexpected_response_error
from .schemas import (
    FolderLockRequest,
    FolderReference,
    MetadataPatchOperation,
    SharedLink,
    Watermark,
)
from .transport.base import HTTPClient
from .transport.dto import RequestParams
from .url_path import url_path

BASE_PATH = "/folders"
FOLDER_LOCK = "/folder_locks"
WATERMARK_SUBRESOURCE = "/watermark"


def _split_etag(
    options: Optional[Dict[str, Any]],
) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, str]]]:
    """
    Returns a copy of the options without 'etag', and the If-Match header
    built from it (None when no etag was given).
    """
    if options is None:
        return None, None

    options = dict(options)
    etag = options.pop("etag", None)
    if etag:
        return options, {"If-Match": etag}
    return options, None


def _collection_refs(folder: Dict[str, Any]) -> List[Dict[str, str]]:
    return [{"id": c["id"]} for c in (folder.get("collections") or [])]


class FoldersManager:
    """
    Manager for the Box 'Folder' endpoints and actions.
    Every operation maps onto one API call through the injected HTTPClient,
    except the collection helpers and set_metadata which make two.
    """

    def __init__(self, client: HTTPClient):
        self.client = client

    @supports_callback
    def get(self, folder_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Requests a folder object with the given ID.

        :param folder_id: Box ID of the folder, '0' for the root folder.
        :param options: Query parameters, e.g. {"fields": "name,collections"}.
        :return: The folder object.
        """
        params = RequestParams(qs=options)
        api_path = url_path(BASE_PATH, folder_id)
        return self.client.wrap_with_default_handler(self.client.get)(api_path, params)

    @supports_callback
    def get_items(self, folder_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Requests the collection of items contained in a folder."""
        params = RequestParams(qs=options)
        api_path = url_path(BASE_PATH, folder_id, "/items")
        return self.client.wrap_with_default_handler(self.client.get)(api_path, params)

    @supports_callback
    def get_collaborations(
        self, folder_id: str, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Requests the collaborations on a folder."""
        params = RequestParams(qs=options)
        api_path = url_path(BASE_PATH, folder_id, "/collaborations")
        return self.client.wrap_with_default_handler(self.client.get)(api_path, params)

    @supports_callback
    def create(self, parent_folder_id: str, name: str) -> Dict[str, Any]:
        """
        Creates a new folder within a parent folder.

        :param parent_folder_id: Box ID of the folder to create the new folder in.
        :param name: The name for the new folder.
        :return: The created folder object.
        """
        logging.info(f"Creating folder '{name}' in folder '{parent_folder_id}'...")
        params = RequestParams(body={"name": name, "parent": {"id": parent_folder_id}})
        return self.client.wrap_with_default_handler(self.client.post)(BASE_PATH, params)

    @supports_callback(legacy_argument="options")
    def copy(
        self,
        folder_id: str,
        new_parent_id: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Copies a folder into a different parent folder.

        :param folder_id: Box ID of the folder to copy.
        :param new_parent_id: Box ID of the destination folder, '0' for All Files.
        :param options: Extra body fields, e.g. {"name": "New name"} to avoid a name clash.
            Older callers pass the callback here; that is still accepted.
        :return: The new folder object.
        """
        logging.info(f"Copying folder '{folder_id}' to folder '{new_parent_id}'...")
        body = dict(options or {})
        body["parent"] = {"id": new_parent_id}
        params = RequestParams(body=body)
        api_path = url_path(BASE_PATH, folder_id, "/copy")
        return self.client.wrap_with_default_handler(self.client.post)(api_path, params)

    @supports_callback
    def update(self, folder_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """
        Updates fields of a folder.

        When ``updates`` holds an 'etag', the update only happens if it
        matches the folder's current ETag; it is sent as If-Match, not in the body.
        """
        body, headers = _split_etag(updates or {})
        if isinstance(body.get("shared_link"), SharedLink):
            body["shared_link"] = body["shared_link"].to_body()

        logging.info(f"Updating folder '{folder_id}' fields: {sorted(body)}")
        params = RequestParams(body=body, headers=headers)
        api_path = url_path(BASE_PATH, folder_id)
        return self.client.wrap_with_default_handler(self.client.put)(api_path, params)

    @supports_callback
    def add_to_collection(self, folder_id: str, collection_id: str) -> Dict[str, Any]:
        """
        Adds a folder to a collection (e.g. Favorites), keeping its other collections.
        """
        folder = self.get(folder_id, {"fields": "collections"})
        collections = _collection_refs(folder)

        if not any(c["id"] == collection_id for c in collections):
            collections.append({"id": collection_id})

        return self.update(folder_id, {"collections": collections})

    @supports_callback
    def remove_from_collection(self, folder_id: str, collection_id: str) -> Dict[str, Any]:
        """Removes a folder from a collection, keeping its other collections."""
        folder = self.get(folder_id, {"fields": "collections"})
        collections = [c for c in _collection_refs(folder) if c["id"] != collection_id]
        return self.update(folder_id, {"collections": collections})

    @supports_callback
    def move(self, folder_id: str, new_parent_id: str) -> Dict[str, Any]:
        """Moves a folder into a new parent folder ('0' for All Files)."""
        logging.info(f"Moving folder '{folder_id}' to folder '{new_parent_id}'...")
        params = RequestParams(body={"parent": {"id": new_parent_id}})
        api_path = url_path(BASE_PATH, folder_id)
        return self.client.wrap_with_default_handler(self.client.put)(api_path, params)

    @supports_callback
    def delete(self, folder_id: str, options: Optional[Dict[str, Any]] = None) -> None:
        """
        Deletes a folder (moves it to the trash).

        :param options: Query parameters, e.g. {"recursive": "true"}.
            An 'etag' entry makes the delete conditional and is sent as If-Match.
        """
        qs, headers = _split_etag(options)
        logging.info(f"Deleting folder '{folder_id}'...")
        params = RequestParams(qs=qs, headers=headers)
        api_path = url_path(BASE_PATH, folder_id)
        return self.client.wrap_with_default_handler(self.client.delete)(api_path, params)

    @supports_callback
    def get_all_metadata(self, folder_id: str) -> Dict[str, Any]:
        """Retrieves every metadata instance on a folder."""
        api_path = url_path(BASE_PATH, folder_id, "metadata")
        return self.client.wrap_with_default_handler(self.client.get)(api_path, None)

    @supports_callback
    def get_metadata(self, folder_id: str, scope: str, template: str) -> Dict[str, Any]:
        """Retrieves a single metadata template instance, e.g. scope 'global', template 'properties'."""
        api_path = url_path(BASE_PATH, folder_id, "metadata", scope, template)
        return self.client.wrap_with_default_handler(self.client.get)(api_path, None)

    @supports_callback
    def add_metadata(
        self, folder_id: str, scope: str, template: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Adds metadata to a folder. The data must match the template schema, or
        go into the unstructured 'properties' template in global scope.
        """
        api_path = url_path(BASE_PATH, folder_id, "metadata", scope, template)
        params = RequestParams(body=data)
        return self.client.wrap_with_default_handler(self.client.post)(api_path, params)

    @supports_callback
    def update_metadata(
        self, folder_id: str, scope: str, template: str, patch: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Updates a metadata template instance with a JSON Patch document."""
        api_path = url_path(BASE_PATH, folder_id, "metadata", scope, template)
        params = RequestParams(
            body=patch,
            headers={"Content-Type": "application/json-patch+json"},
        )
        return self.client.wrap_with_default_handler(self.client.put)(api_path, params)

    @supports_callback
    def set_metadata(
        self, folder_id: str, scope: str, template: str, metadata: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Sets metadata on a folder, overwriting the values of the given keys
        when an instance of the template already exists.
        """
        try:
            return self.add_metadata(folder_id, scope, template, metadata)
        except BoxAPIError as e:
            if e.status_code != 409:
                raise

        logging.info(
            f"Metadata {scope}/{template} already exists on folder '{folder_id}', updating instead."
        )
        updates = [
            MetadataPatchOperation(op="add", path=f"/{key}", value=value).model_dump()
            for key, value in metadata.items()
        ]
        return self.update_metadata(folder_id, scope, template, updates)

    @supports_callback
    def delete_metadata(self, folder_id: str, scope: str, template: str) -> None:
        """Deletes a metadata template instance from a folder."""
        api_path = url_path(BASE_PATH, folder_id, "metadata", scope, template)
        return self.client.wrap_with_default_handler(self.client.delete)(api_path, None)

    @supports_callback
    def get_trashed_folder(
        self, folder_id: str, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Retrieves a folder that has been moved to the trash."""
        params = RequestParams(qs=options)
        api_path = url_path(BASE_PATH, folder_id, "trash")
        return self.client.wrap_with_default_handler(self.client.get)(api_path, params)

    @supports_callback
    def restore_from_trash(
        self, folder_id: str, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Restores a trashed folder. By default it goes back to its previous parent.
        If that parent is gone or has a same-named item, pass a new
        'parent_id' and/or 'name' in the options.
        """
        body = dict(options or {})
        if body.get("parent_id"):
            body["parent"] = {"id": body.pop("parent_id")}

        logging.info(f"Restoring folder '{folder_id}' from the trash...")
        params = RequestParams(body=body)
        api_path = url_path(BASE_PATH, folder_id)
        return self.client.wrap_with_default_handler(self.client.post)(api_path, params)

    @supports_callback(legacy_argument="options")
    def delete_permanently(self, folder_id: str, options: Optional[Dict[str, Any]] = None) -> None:
        """
        Permanently deletes a trashed folder. This cannot be undone.

        :param options: Only 'etag' is used, to make the delete conditional.
            Older callers pass the callback here; that is still accepted.
        """
        _, headers = _split_etag(options)
        logging.info(f"Permanently deleting folder '{folder_id}'...")
        params = RequestParams(headers=headers)
        api_path = url_path(BASE_PATH, folder_id, "/trash")
        return self.client.wrap_with_default_handler(self.client.delete)(api_path, params)

    @supports_callback
    def get_watermark(
        self, folder_id: str, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Retrieves the watermark of a folder.

        :return: The watermark object itself, without the response envelope.
        :raises UnexpectedResponseError: For any status other than 200.
        """
        api_path = url_path(BASE_PATH, folder_id, WATERMARK_SUBRESOURCE)
        params = RequestParams(qs=options)

        response = self.client.get(api_path, params)
        if response.status_code != 200:
            raise build_unexpected_response_error(response)

        return (response.body or {}).get("watermark")

    @supports_callback
    def apply_watermark(
        self, folder_id: str, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Applies or updates the watermark of a folder."""
        api_path = url_path(BASE_PATH, folder_id, WATERMARK_SUBRESOURCE)
        watermark = Watermark(**(options or {}))
        params = RequestParams(body={"watermark": watermark.model_dump()})
        return self.client.wrap_with_default_handler(self.client.put)(api_path, params)

    @supports_callback
    def remove_watermark(self, folder_id: str) -> None:
        """Removes the watermark from a folder."""
        api_path = url_path(BASE_PATH, folder_id, WATERMARK_SUBRESOURCE)
        return self.client.wrap_with_default_handler(self.client.delete)(api_path, None)

    @supports_callback
    def lock(self, folder_id: str) -> Dict[str, Any]:
        """
        Locks a folder against being moved or deleted.

        :return: The folder lock object.
        """
        logging.info(f"Locking folder '{folder_id}'...")
        lock_request = FolderLockRequest(folder=FolderReference(id=folder_id))
        params = RequestParams(body=lock_request.model_dump())
        return self.client.wrap_with_default_handler(self.client.post)(FOLDER_LOCK, params)

    @supports_callback
    def get_locks(self, folder_id: str) -> Dict[str, Any]:
        """Lists the locks on a folder."""
        params = RequestParams(qs={"folder_id": folder_id})
        return self.client.wrap_with_default_handler(self.client.get)(FOLDER_LOCK, params)

    @supports_callback
    def delete_lock(self, folder_lock_id: str) -> None:
        """Deletes a folder lock by its own ID."""
        logging.info(f"Deleting folder lock '{folder_lock_id}'...")
        api_path = url_path(FOLDER_LOCK, folder_lock_id)
        return self.client.wrap_with_default_handler(self.client.delete)(api_path, None)
