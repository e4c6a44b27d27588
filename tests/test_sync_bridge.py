"""Tests for SyncBridge."""

import pytest

from kanbanr.channels import InMemoryChannel
from kanbanr.models import Board, BoardList, Card
from kanbanr.services import SyncBridge, resolve_element_id

NOW = 1700000000000


@pytest.fixture
def channel() -> InMemoryChannel:
    return InMemoryChannel()


@pytest.fixture
def bridge(channel: InMemoryChannel) -> SyncBridge:
    return SyncBridge(channel, element_id="board", clock=lambda: NOW)


@pytest.fixture
def board() -> Board:
    return Board(
        lists={
            "todo": BoardList(name="todo", items=[Card(id="c1", title="One")], position=1),
            "done": BoardList(name="done", position=2),
        }
    )


class TestResolveElementId:
    """Tests for element ID resolution."""

    def test_explicit_wins(self):
        assert resolve_element_id("board", lambda: "other") == "board"

    def test_falls_back_to_lookup(self):
        assert resolve_element_id(None, lambda: "found") == "found"
        assert resolve_element_id("  ", lambda: "found") == "found"

    def test_nothing_resolved(self):
        assert resolve_element_id(None) is None
        assert resolve_element_id(None, lambda: None) is None
        assert resolve_element_id("", lambda: "") is None

    def test_lookup_called_once_at_construction(self):
        calls = []

        def lookup() -> str:
            calls.append(1)
            return "found"

        bridge = SyncBridge(InMemoryChannel(), element_lookup=lookup)
        bridge.publish(Board())
        bridge.publish(Board())

        assert bridge.element_id == "found"
        assert len(calls) == 1


class TestPublish:
    """Tests for outbound board snapshots."""

    def test_publish_sends_full_board_with_marker(
        self, bridge: SyncBridge, channel: InMemoryChannel, board: Board
    ):
        payload = bridge.publish(board)

        assert payload is not None
        assert channel.last("board") == payload
        assert payload["_timestamp"] == NOW
        assert payload["todo"] == {
            "name": "todo",
            "items": [{"id": "c1", "title": "One"}],
            "listPosition": 1,
        }
        assert "done" in payload

    def test_markers_strictly_increase(self, bridge: SyncBridge, board: Board):
        """Snapshots sent within one millisecond still get distinct markers."""
        first = bridge.publish(board)
        second = bridge.publish(board)
        assert second["_timestamp"] > first["_timestamp"]

    def test_no_element_id_skips(self, channel: InMemoryChannel, board: Board):
        bridge = SyncBridge(channel)
        assert not bridge.has_host
        assert bridge.publish(board) is None
        assert channel.sent == []

    def test_no_channel_skips(self, board: Board):
        bridge = SyncBridge(None, element_id="board")
        assert not bridge.has_host
        assert bridge.publish(board) is None


class TestCardClick:
    """Tests for card selection messages."""

    def test_click_counts_per_card(self, bridge: SyncBridge, channel: InMemoryChannel):
        one = Card(id="c1", title="One")
        two = Card(id="c2", title="Two")

        bridge.publish_card_click("todo", one, 1)
        bridge.publish_card_click("todo", one, 1)
        bridge.publish_card_click("todo", two, 2)

        messages = channel.messages_for("board__kanban__card")
        assert [m["clickCount"] for m in messages] == [1, 2, 1]
        assert messages[0] == {
            "listName": "todo",
            "title": "One",
            "id": "c1",
            "position": 1,
            "clickCount": 1,
        }

    def test_card_channel_key(self, bridge: SyncBridge):
        assert bridge.card_channel_key == "board__kanban__card"
        assert SyncBridge(None).card_channel_key is None

    def test_counts_without_host(self):
        bridge = SyncBridge(None)
        card = Card(id="c1", title="One")

        bridge.publish_card_click("todo", card, 1)
        click = bridge.publish_card_click("todo", card, 1)

        assert click.click_count == 2
        assert bridge.click_count("c1") == 2
        assert bridge.click_count("other") == 0


class TestReceive:
    """Tests for inbound host messages."""

    def test_receive_valid(self, bridge: SyncBridge):
        board = bridge.receive(
            {
                "data": {
                    "b": {"name": "b", "items": [], "listPosition": 5},
                    "a": {"name": "a", "items": [{"id": "a-1", "title": "x"}], "listPosition": 2},
                    "_timestamp": 123,
                }
            }
        )
        assert board is not None
        assert list(board.lists) == ["a", "b"]
        assert [lst.position for lst in board.lists.values()] == [1, 2]

    @pytest.mark.parametrize(
        "message",
        [
            {},
            {"data": None},
            {"data": {}},
            {"data": "not a board"},
            {"data": ["a", "b"]},
            {"data": {"todo": "oops"}},
            {"data": {"todo": {"items": [{"title": "missing id"}]}}},
            {"data": {1: {"name": "one"}}},
            None,
        ],
    )
    def test_receive_unusable(self, bridge: SyncBridge, message):
        assert bridge.receive(message) is None

    def test_acknowledge_echoes(self, bridge: SyncBridge, channel: InMemoryChannel, board: Board):
        payload = bridge.acknowledge(board)
        assert channel.last("board") == payload
        assert "_timestamp" in payload


class TestAttach:
    """Tests for inbound subscription."""

    def test_attach_subscribes(self, bridge: SyncBridge, channel: InMemoryChannel):
        received = []
        assert bridge.attach(received.append)

        channel.deliver("board", {"data": {}})

        assert received == [{"data": {}}]

    def test_attach_without_host(self):
        assert not SyncBridge(None, element_id="board").attach(lambda message: None)
        assert not SyncBridge(InMemoryChannel()).attach(lambda message: None)
