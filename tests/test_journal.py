"""Unit tests for the undo log and removal tokens."""

import pytest
from dancing_links.core.errors import ItemStateError, ReinsertionOrderError
from dancing_links.core.items import Items
from dancing_links.core.journal import UndoLog
from dancing_links.core.link import ListHeader


class TestUndoLogWithItems:
    """Tests driving an item ring through an undo log."""

    def test_undo_restores_ring(self):
        """Undoing every removal restores the original ring."""
        ring = Items(5)
        log = UndoLog()

        for i in (2, 4, 1):
            log.remove(ring.item(i))
        assert ring.order() == [3, 5]
        assert len(log) == 3

        log.rollback()
        assert ring == Items(5)
        assert len(log) == 0

    def test_token_undo_in_order(self):
        """Tokens undone newest-first are accepted."""
        ring = Items(4)
        log = UndoLog()
        first = log.remove(ring.item(1))
        second = log.remove(ring.item(2))

        second.undo()
        first.undo()

        assert ring.order() == [1, 2, 3, 4]
        assert first.consumed and second.consumed

    def test_token_out_of_order(self):
        """Undoing an older token first raises and changes nothing."""
        ring = Items(4)
        log = UndoLog()
        first = log.remove(ring.item(1))
        log.remove(ring.item(2))

        with pytest.raises(ReinsertionOrderError):
            first.undo()
        assert ring.order() == [3, 4]
        assert len(log) == 2
        assert not first.consumed

    def test_token_consumed_once(self):
        """A token cannot be undone twice."""
        ring = Items(3)
        log = UndoLog()
        token = log.remove(ring.item(3))
        token.undo()

        with pytest.raises(ItemStateError):
            token.undo()

    def test_foreign_token(self):
        """A token from another log is rejected."""
        ring = Items(3)
        log, other = UndoLog(), UndoLog()
        token = other.remove(ring.item(1))
        log.remove(ring.item(2))

        with pytest.raises(ItemStateError):
            log.undo(token)

    def test_nothing_to_undo(self):
        """undo() on an empty log raises."""
        with pytest.raises(ItemStateError):
            UndoLog().undo()

    def test_mark_rollback(self):
        """rollback(mark) undoes only the removals after the mark."""
        ring = Items(6)
        log = UndoLog()
        log.remove(ring.item(6))
        mark = log.mark()
        log.remove(ring.item(1))
        log.remove(ring.item(3))

        log.rollback(mark)
        assert ring.order() == [1, 2, 3, 4, 5]
        assert log.mark() == 1

    def test_rollback_bad_mark(self):
        """A mark beyond the log depth is rejected."""
        with pytest.raises(ValueError):
            UndoLog().rollback(3)


class TestUndoLogWithLinkedList:
    """Tests driving the generic list through an undo log."""

    def test_descent_and_backtrack(self):
        """Nested descents backtrack to the original list and size."""
        header = ListHeader()
        nodes = [header.prepend(v) for v in "abcde"]
        log = UndoLog()

        log.remove(nodes[1])
        outer = log.mark()
        log.remove(nodes[3])
        log.remove(nodes[0])
        assert header.values() == ["c", "e"]
        assert len(header) == 2

        log.rollback(outer)
        assert header.values() == ["a", "c", "d", "e"]

        log.rollback()
        assert header.values() == list("abcde")
        assert len(header) == 5

    def test_double_remove_rejected(self):
        """A node with a pending removal cannot be removed again."""
        header = ListHeader()
        nodes = [header.prepend(v) for v in "abc"]
        log = UndoLog()
        log.remove(nodes[1])

        with pytest.raises(ItemStateError):
            log.remove(nodes[1])
        assert len(header) == 2
        assert header.values() == ["a", "c"]
        assert len(log) == 1

        log.undo()
        log.remove(nodes[1])
        assert len(header) == 2

    def test_undo_returns_target(self):
        """undo() hands back the reinserted node."""
        header = ListHeader()
        node = header.prepend("x")
        log = UndoLog()
        log.remove(node)

        assert log.undo() is node
        assert header.values() == ["x"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
