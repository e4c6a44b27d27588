"""Replay command: run a script of board operations and print the result."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from ..channels import ChannelError, HostChannel, HttpChannel, InMemoryChannel
from ..engine import KanbanBoard
from ..models import BoardOptions, MutationResult, MutationStatus
from ..services import OptionsService
from .output import error, info, success

logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_ID = "kanban"

# Example script:
#   - op: create_list
#     name: Todo
#   - op: add_card
#     list: Todo
#     title: Write tests
#   - op: drag_end
#     type: TASK
#     source: {droppableId: Todo, index: 0}
#     destination: {droppableId: Done, index: 0}


class ReplayError(Exception):
    """A script or board file could not be used."""

    pass


def _click(board: KanbanBoard, step: Mapping[str, Any]) -> MutationResult:
    click = board.click_card(step["list"], step["card"])
    status = MutationStatus.UNCHANGED if click else MutationStatus.NOT_FOUND
    message = f"clickCount={click.click_count}" if click else None
    return MutationResult(status, board.board, message=message)


OPERATIONS: dict[str, Callable[[KanbanBoard, Mapping[str, Any]], MutationResult]] = {
    "create_list": lambda board, step: board.create_list(step["name"]),
    "delete_list": lambda board, step: board.delete_list(step["list"]),
    "rename_list": lambda board, step: board.rename_list(step["list"], step["name"]),
    "move_list": lambda board, step: board.move_list(step["from"], step["to"]),
    "add_card": lambda board, step: board.add_card(step["list"], step["title"]),
    "delete_card": lambda board, step: board.delete_card(step["list"], step["card"]),
    "move_card": lambda board, step: board.move_card(
        step["from_list"], step["from"], step["to_list"], step["to"]
    ),
    "drag_end": lambda board, step: board.drag_end(
        {key: value for key, value in step.items() if key != "op"}
    ),
    "click_card": _click,
    "host_push": lambda board, step: board.handle_host_message({"data": step.get("data")}),
}


def load_yaml(path: Path) -> Any:
    """Load a YAML (or JSON) file.

    Raises:
        ReplayError: If the file cannot be read or parsed
    """
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise ReplayError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ReplayError(f"Invalid YAML in {path}: {e}") from e


def load_script(path: Path) -> list[dict[str, Any]]:
    """Load a list of operation steps."""
    steps = load_yaml(path)
    if steps is None:
        return []
    if not isinstance(steps, list) or not all(isinstance(s, dict) for s in steps):
        raise ReplayError(f"{path.name} must contain a list of operations")
    return steps


def apply_step(board: KanbanBoard, step: Mapping[str, Any]) -> MutationResult:
    """Apply one script step to the board.

    Raises:
        ReplayError: If the operation is unknown or lacks arguments
    """
    op = step.get("op")
    handler = OPERATIONS.get(op) if isinstance(op, str) else None
    if handler is None:
        raise ReplayError(f"Unknown operation: {op!r}")
    try:
        return handler(board, step)
    except KeyError as e:
        raise ReplayError(f"Operation {op!r} is missing argument {e}") from e
    except (TypeError, ValueError) as e:
        raise ReplayError(f"Operation {op!r} has invalid arguments: {e}") from e


def run_replay(
    board_file: Path | None,
    script_file: Path | None,
    element_id: str | None = None,
    host_url: str | None = None,
    options_file: Path | None = None,
) -> int:
    """Replay a script against a board and print the final board as JSON.

    Messages go to ``host_url`` over HTTP when given, otherwise they are
    only recorded.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    element_id = element_id or DEFAULT_ELEMENT_ID

    options_service = OptionsService(options_file)
    options = options_service.get_options()
    if options_service.has_options_error:
        info(f"Using default options: {options_service.options_error}")

    channel: HostChannel = HttpChannel(host_url) if host_url else InMemoryChannel()
    try:
        return _replay(board_file, script_file, element_id, channel, options)
    except ChannelError as e:
        logger.error("Host channel failed: %s", e)
        error(str(e))
        return 1
    finally:
        if isinstance(channel, HttpChannel):
            channel.close()


def _replay(
    board_file: Path | None,
    script_file: Path | None,
    element_id: str,
    channel: HostChannel,
    options: BoardOptions,
) -> int:
    try:
        data = load_yaml(board_file) if board_file else None
        if data is not None and not isinstance(data, dict):
            raise ReplayError(f"{board_file} must contain a mapping of lists")
        board = KanbanBoard(data=data, element_id=element_id, channel=channel, options=options)
        steps = load_script(script_file) if script_file else []

        for number, step in enumerate(steps, start=1):
            result = apply_step(board, step)
            line = f"{number}. {step['op']}: {result.status.value}"
            if result.message:
                line = f"{line} ({result.message})"
            if result.rejected:
                error(line)
            else:
                success(line)
    except (ReplayError, TypeError, ValueError) as e:
        logger.error("Replay failed: %s", e)
        error(str(e))
        return 1

    if isinstance(channel, InMemoryChannel):
        info(f"{len(channel.sent)} message(s) recorded for host '{element_id}'")
    print(json.dumps(board.snapshot(), indent=2, ensure_ascii=False))
    return 0
