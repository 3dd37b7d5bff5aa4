# tests/test_folders_resources.py
import pytest

from boxfolders.exceptions import UnexpectedResponseError
from boxfolders.transport.dto import APIResponse, RequestParams


def test_get_all_metadata(manager, mock_client):
    mock_client.get.return_value = {"entries": [], "limit": 100}

    assert manager.get_all_metadata("123") == {"entries": [], "limit": 100}
    mock_client.get.assert_called_once_with("/folders/123/metadata", None)


def test_get_metadata(manager, mock_client):
    manager.get_metadata("123", "enterprise", "projectInfo")
    mock_client.get.assert_called_once_with(
        "/folders/123/metadata/enterprise/projectInfo", None
    )


def test_update_metadata_uses_json_patch_content_type(manager, mock_client):
    patch = [{"op": "replace", "path": "/foo", "value": "baz"}]

    manager.update_metadata("123", "global", "properties", patch)

    mock_client.put.assert_called_once_with(
        "/folders/123/metadata/global/properties",
        RequestParams(body=patch, headers={"Content-Type": "application/json-patch+json"}),
    )


def test_delete_metadata(manager, mock_client):
    manager.delete_metadata("123", "global", "properties")
    mock_client.delete.assert_called_once_with(
        "/folders/123/metadata/global/properties", None
    )


def test_get_watermark_returns_inner_object(manager, mock_client):
    """Only the watermark object is returned, not the response envelope."""
    mock_client.get.return_value = APIResponse(
        status_code=200, body={"watermark": {"imprint": "default"}}
    )

    result = manager.get_watermark("123")

    assert result == {"imprint": "default"}
    mock_client.wrap_with_default_handler.assert_not_called()
    mock_client.get.assert_called_once_with("/folders/123/watermark", RequestParams())


@pytest.mark.parametrize("status_code", [201, 204, 404, 500])
def test_get_watermark_non_200_raises(manager, mock_client, status_code):
    mock_client.get.return_value = APIResponse(
        status_code=status_code, body={"code": "not_found"}, reason="Whatever"
    )

    with pytest.raises(UnexpectedResponseError) as excinfo:
        manager.get_watermark("123")

    assert excinfo.value.status_code == status_code


def test_apply_watermark_default(manager, mock_client):
    manager.apply_watermark("123")
    mock_client.put.assert_called_once_with(
        "/folders/123/watermark",
        RequestParams(body={"watermark": {"imprint": "default"}}),
    )


def test_apply_watermark_options_override_default(manager, mock_client):
    manager.apply_watermark("123", {"imprint": "custom"})

    params = mock_client.put.call_args.args[1]
    assert params.body == {"watermark": {"imprint": "custom"}}


@pytest.mark.parametrize("imprint", [None, 7, {"style": "diagonal"}])
def test_apply_watermark_passes_imprint_as_given(manager, mock_client, imprint):
    """Caller values replace the default imprint without type checks."""
    manager.apply_watermark("123", {"imprint": imprint})

    params = mock_client.put.call_args.args[1]
    assert params.body == {"watermark": {"imprint": imprint}}


def test_apply_watermark_extra_keys_pass_through(manager, mock_client):
    options = {"position": "center", "opacity": 0.5}

    manager.apply_watermark("123", options)

    params = mock_client.put.call_args.args[1]
    assert params.body == {
        "watermark": {"imprint": "default", "position": "center", "opacity": 0.5}
    }
    assert options == {"position": "center", "opacity": 0.5}


def test_get_watermark_empty_body(manager, mock_client):
    mock_client.get.return_value = APIResponse(status_code=200, body=None)

    assert manager.get_watermark("123") is None


def test_remove_watermark(manager, mock_client):
    manager.remove_watermark("123")
    mock_client.delete.assert_called_once_with("/folders/123/watermark", None)


def test_lock(manager, mock_client):
    mock_client.post.return_value = {"type": "folder_lock", "id": "L1"}

    result = manager.lock("123")

    assert result["id"] == "L1"
    mock_client.post.assert_called_once_with(
        "/folder_locks",
        RequestParams(
            body={
                "folder": {"type": "folder", "id": "123"},
                "locked_operations": {"move": True, "delete": True},
            }
        ),
    )


def test_get_locks(manager, mock_client):
    manager.get_locks("123")
    mock_client.get.assert_called_once_with(
        "/folder_locks", RequestParams(qs={"folder_id": "123"})
    )


def test_delete_lock(manager, mock_client):
    manager.delete_lock("L1")
    mock_client.delete.assert_called_once_with("/folder_locks/L1", None)
