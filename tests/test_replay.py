"""Tests for the replay command."""

import json
from pathlib import Path

import pytest

from kanbanr.__main__ import main, parse_args
from kanbanr.cli.replay import ReplayError, load_script, run_replay


def write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def printed_board(out: str) -> dict:
    return json.loads(out[out.index("{") :])


@pytest.fixture
def board_file(tmp_path: Path) -> Path:
    return write(
        tmp_path / "board.yml",
        """
todo:
  name: Todo
  listPosition: 1
  items:
    - {id: todo-1, title: First}
    - {id: todo-2, title: Second}
done:
  name: Done
  listPosition: 2
  items: []
""",
    )


class TestRunReplay:
    """Tests for run_replay."""

    def test_replays_operations(self, tmp_path: Path, board_file: Path, capsys):
        script = write(
            tmp_path / "script.yml",
            """
- op: add_card
  list: done
  title: Shipped
- op: drag_end
  type: TASK
  source: {droppableId: todo, index: 0}
  destination: {droppableId: done, index: 0}
- op: move_list
  from: 1
  to: 0
""",
        )

        exit_code = run_replay(board_file, script)

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "1. add_card: applied" in out
        assert "3 message(s) recorded for host 'kanban'" in out
        board = printed_board(out)
        assert list(board) == ["done", "todo"]
        assert [card["title"] for card in board["done"]["items"]] == ["First", "Shipped"]
        assert board["done"]["listPosition"] == 1

    def test_rejected_steps_reported(self, tmp_path: Path, board_file: Path, capsys):
        script = write(
            tmp_path / "script.yml",
            """
- op: rename_list
  list: todo
  name: done
- op: click_card
  list: todo
  card: todo-1
""",
        )

        exit_code = run_replay(board_file, script)

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "1. rename_list: duplicate_name" in out
        assert "clickCount=1" in out
        assert printed_board(out)["todo"]["name"] == "Todo"

    def test_no_files_prints_empty_board(self, capsys):
        assert run_replay(None, None) == 0
        assert printed_board(capsys.readouterr().out) == {}

    def test_unknown_operation(self, tmp_path: Path, capsys):
        script = write(tmp_path / "script.yml", "- op: explode\n")
        assert run_replay(None, script) == 1
        assert "Unknown operation" in capsys.readouterr().out

    def test_missing_argument(self, tmp_path: Path, capsys):
        script = write(tmp_path / "script.yml", "- op: create_list\n")
        assert run_replay(None, script) == 1
        assert "missing argument" in capsys.readouterr().out

    def test_missing_board_file(self, tmp_path: Path, capsys):
        assert run_replay(tmp_path / "nope.yml", None) == 1
        assert "Cannot read" in capsys.readouterr().out

    def test_board_file_not_a_mapping(self, tmp_path: Path):
        board = write(tmp_path / "board.yml", "- a\n- b\n")
        assert run_replay(board, None) == 1

    def test_board_file_with_non_string_keys(self, tmp_path: Path, capsys):
        board = write(tmp_path / "board.yml", "1:\n  name: one\n")
        assert run_replay(board, None) == 1
        assert "must be a string" in capsys.readouterr().out

    def test_malformed_host_push_keeps_board(self, tmp_path: Path, board_file: Path, capsys):
        script = write(
            tmp_path / "script.yml",
            """
- op: host_push
  data: {1: {name: one}}
- op: create_list
  name: _hidden
""",
        )

        exit_code = run_replay(board_file, script)

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "1. host_push: unchanged" in out
        assert "2. create_list: reserved_name" in out
        assert list(printed_board(out)) == ["todo", "done"]


class TestLoadScript:
    """Tests for script loading."""

    def test_empty_script(self, tmp_path: Path):
        assert load_script(write(tmp_path / "script.yml", "")) == []

    def test_script_must_be_list(self, tmp_path: Path):
        with pytest.raises(ReplayError):
            load_script(write(tmp_path / "script.yml", "op: create_list\n"))


class TestMain:
    """Tests for the CLI entry point."""

    def test_parse_args_defaults(self):
        args = parse_args([])
        assert args.board is None
        assert args.script is None
        assert args.verbose == 0

    def test_main_exit_code(self, tmp_path: Path, capsys, monkeypatch):
        monkeypatch.delenv("KANBANR_ELEMENT_ID", raising=False)
        script = write(tmp_path / "script.yml", "- op: create_list\n  name: Todo\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["--script", str(script), "--element-id", "demo"])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "recorded for host 'demo'" in out
        assert list(printed_board(out)) == ["Todo"]
