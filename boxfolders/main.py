# main.py
import argparse
import json
import logging
import sys
from typing import Optional

import requests

from .config import get_settings
from .exceptions import BoxAPIError
from .folders import FoldersManager
from .transport.requests_client import BoxHTTPClient


def setup_logging():
    """Configures logging to file and console explicitly."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console goes to stderr so stdout stays clean JSON
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    logging.getLogger("urllib3").setLevel(logging.WARNING)


def initialize_folders_manager(settings) -> Optional[FoldersManager]:
    """
    Builds the HTTP client from settings and returns a FoldersManager,
    or None if the client could not be created.
    """
    try:
        client = BoxHTTPClient(
            base_url=settings.BOX_API_BASE_URL,
            access_token=settings.BOX_ACCESS_TOKEN,
            timeout=settings.BOX_REQUEST_TIMEOUT,
            user_agent=settings.BOX_USER_AGENT,
        )
    except ValueError as e:
        logging.error(f"Failed to initialize Box HTTP client. Error: {e}")
        return None
    return FoldersManager(client)


def _options(args) -> Optional[dict]:
    options = {}
    if getattr(args, "fields", None):
        options["fields"] = args.fields
    if getattr(args, "etag", None):
        options["etag"] = args.etag
    return options or None


def _run_watermark(manager: FoldersManager, args):
    if args.action == "apply":
        return manager.apply_watermark(args.folder_id)
    if args.action == "remove":
        return manager.remove_watermark(args.folder_id)
    return manager.get_watermark(args.folder_id)


def _run_delete(manager: FoldersManager, args):
    options = _options(args) or {}
    if args.recursive:
        options["recursive"] = "true"
    return manager.delete(args.folder_id, options or None)


def _run_restore(manager: FoldersManager, args):
    options = {}
    if args.parent_id:
        options["parent_id"] = args.parent_id
    if args.name:
        options["name"] = args.name
    return manager.restore_from_trash(args.folder_id, options or None)


COMMANDS = {
    "get": lambda m, a: m.get(a.folder_id, _options(a)),
    "items": lambda m, a: m.get_items(a.folder_id, _options(a)),
    "collaborations": lambda m, a: m.get_collaborations(a.folder_id, _options(a)),
    "create": lambda m, a: m.create(a.parent_id, a.name),
    "copy": lambda m, a: m.copy(a.folder_id, a.parent_id, {"name": a.name} if a.name else None),
    "move": lambda m, a: m.move(a.folder_id, a.parent_id),
    "rename": lambda m, a: m.update(a.folder_id, {"name": a.name, "etag": a.etag}),
    "delete": _run_delete,
    "trash": lambda m, a: m.get_trashed_folder(a.folder_id, _options(a)),
    "restore": _run_restore,
    "purge": lambda m, a: m.delete_permanently(a.folder_id, _options(a)),
    "metadata": lambda m, a: m.get_all_metadata(a.folder_id),
    "watermark": _run_watermark,
    "lock": lambda m, a: m.lock(a.folder_id),
    "locks": lambda m, a: m.get_locks(a.folder_id),
    "unlock": lambda m, a: m.delete_lock(a.lock_id),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxfolders", description="Manage Box folders from the command line."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("get", "items", "collaborations", "trash"):
        p = sub.add_parser(name)
        p.add_argument("folder_id")
        p.add_argument("--fields", help="Comma-separated list of fields to return.")

    p = sub.add_parser("create")
    p.add_argument("parent_id")
    p.add_argument("name")

    p = sub.add_parser("copy")
    p.add_argument("folder_id")
    p.add_argument("parent_id")
    p.add_argument("--name", help="New name for the copy.")

    p = sub.add_parser("move")
    p.add_argument("folder_id")
    p.add_argument("parent_id")

    p = sub.add_parser("rename")
    p.add_argument("folder_id")
    p.add_argument("name")
    p.add_argument("--etag")

    p = sub.add_parser("delete")
    p.add_argument("folder_id")
    p.add_argument("--recursive", action="store_true")
    p.add_argument("--etag")

    p = sub.add_parser("restore")
    p.add_argument("folder_id")
    p.add_argument("--parent-id", dest="parent_id")
    p.add_argument("--name")

    p = sub.add_parser("purge")
    p.add_argument("folder_id")
    p.add_argument("--etag")

    p = sub.add_parser("metadata")
    p.add_argument("folder_id")

    p = sub.add_parser("watermark")
    p.add_argument("action", choices=["get", "apply", "remove"])
    p.add_argument("folder_id")

    for name in ("lock", "locks"):
        p = sub.add_parser(name)
        p.add_argument("folder_id")

    p = sub.add_parser("unlock")
    p.add_argument("lock_id")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        logging.critical(f"Invalid Box client configuration: {e}")
        return 1

    setup_logging()
    manager = initialize_folders_manager(settings)
    if manager is None:
        logging.critical("Could not establish a connection to the Box API.")
        return 1

    try:
        result = COMMANDS[args.command](manager, args)
    except BoxAPIError as e:
        logging.error(f"Box API error while running '{args.command}': {e}")
        return 1
    except requests.exceptions.RequestException as e:
        logging.error(f"Network error while running '{args.command}': {e}", exc_info=True)
        return 1

    if result is not None:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
