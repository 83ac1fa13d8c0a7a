"""Unit tests for the array-backed item ring."""

import numpy as np
import pytest
from dancing_links.core.errors import ItemStateError, ReinsertionOrderError, SentinelIndexError
from dancing_links.core.items import ItemNode, Items


class TestConstruction:
    """Tests for building a ring."""

    def test_init_links_adjacent_nodes(self):
        """Nodes point to directly adjacent nodes upon construction."""
        expected = Items.from_nodes([
            ItemNode(previous=7, next=1),
            ItemNode(previous=0, next=2),
            ItemNode(previous=1, next=3),
            ItemNode(previous=2, next=4),
            ItemNode(previous=3, next=5),
            ItemNode(previous=4, next=6),
            ItemNode(previous=5, next=7),
            ItemNode(previous=6, next=0),
        ])
        assert Items(7) == expected

    @pytest.mark.parametrize("n", [0, 1, 2, 5, 64])
    def test_ring_formula(self, n):
        """previous = i-1 and next = i+1, modulo n+1."""
        ring = Items(n)
        for i in range(n + 1):
            assert ring[i] == ItemNode((i - 1) % (n + 1), (i + 1) % (n + 1))

    @pytest.mark.parametrize("n", [0, 1, 7, 100])
    def test_count_after_construction(self, n):
        """A new ring holds exactly n live items."""
        ring = Items(n)
        assert ring.items().count() == n
        assert len(ring) == n
        assert ring.capacity == n

    def test_empty_ring(self):
        """A ring of zero items is just the sentinel."""
        ring = Items(0)
        assert ring[0] == ItemNode(0, 0)
        assert ring.order() == []

    def test_negative_size(self):
        """Negative sizes are rejected."""
        with pytest.raises(ValueError):
            Items(-1)

    @pytest.mark.parametrize("index", [-1, 4])
    def test_slot_access_out_of_range(self, index):
        """Slot access never wraps negative indices."""
        with pytest.raises(IndexError):
            Items(3)[index]

    def test_slot_access_sentinel(self):
        """The sentinel slot can be read directly."""
        assert Items(3)[0] == ItemNode(3, 1)

    def test_backing_array(self):
        """The nodes live in a single structured numpy array."""
        ring = Items(3)
        assert ring.nodes.shape == (4,)
        assert list(ring.nodes["next"]) == [1, 2, 3, 0]


class TestTraversal:
    """Tests for the item cursor as an iterator."""

    def test_items_yields_live_indices(self):
        """Traversal visits the live items in ring order."""
        ring = Items(5)
        assert list(ring.items()) == [1, 2, 3, 4, 5]

    def test_cursor_is_single_pass(self):
        """A consumed cursor yields nothing more."""
        cursor = Items(4).items()
        assert cursor.count() == 4
        assert list(cursor) == []

    def test_str(self):
        """The string form shows the live order."""
        assert str(Items(3)) == "[1 -> 2 -> 3]"


class TestRemoval:
    """Tests for removing items."""

    def test_remove_one(self):
        """Removing an item drops the count by one."""
        ring = Items(7)
        ring.item(1).remove()
        assert ring.items().count() == 6
        assert ring.order() == [2, 3, 4, 5, 6, 7]

    def test_removed_node_keeps_neighbours(self):
        """The removed slot keeps its old previous/next."""
        ring = Items(7)
        ring.item(4).remove()
        assert ring[4] == ItemNode(3, 5)
        assert ring[3].next == 5
        assert ring[5].previous == 3

    def test_remove_all(self):
        """Removing every item empties the ring."""
        ring = Items(7)
        for i in range(1, 8):
            ring.item(i).remove()
        assert ring.items().count() == 0
        assert ring[0] == ItemNode(0, 0)

    def test_remove_twice(self):
        """Removing an already removed item raises."""
        ring = Items(3)
        ring.item(2).remove()
        before = ring.snapshot()
        with pytest.raises(ItemStateError):
            ring.item(2).remove()
        assert before.tolist() == ring.nodes.tolist()

    def test_sentinel_index_rejected(self):
        """Index 0 is never a live item."""
        ring = Items(3)
        with pytest.raises(SentinelIndexError):
            ring.item(0)

    def test_sentinel_cursor_cannot_remove(self):
        """The traversal cursor is anchored at the sentinel and cannot remove."""
        ring = Items(3)
        with pytest.raises(SentinelIndexError):
            ring.items().remove()
        with pytest.raises(SentinelIndexError):
            ring.items().reinsert()

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range(self, index):
        """Indices outside 1..n raise IndexError."""
        with pytest.raises(IndexError):
            Items(3).item(index)

    def test_sentinel_error_is_index_error(self):
        """SentinelIndexError can be caught as IndexError."""
        with pytest.raises(IndexError):
            Items(3).item(0)


class TestReinsertion:
    """Tests for reinsertion and the reverse-order discipline."""

    def test_reinsert_one(self):
        """Remove then reinsert restores count and every link."""
        ring = Items(7)
        before = ring.snapshot()

        ring.item(1).remove()
        assert ring.items().count() == 6
        ring.item(1).reinsert()

        assert ring.items().count() == 7
        assert before.tolist() == ring.nodes.tolist()

    def test_same_cursor_round_trip(self):
        """One cursor can remove and then reinsert its item."""
        ring = Items(4)
        cursor = ring.item(2)
        cursor.remove()
        assert ring.order() == [1, 3, 4]
        cursor.reinsert()
        assert ring.order() == [1, 2, 3, 4]

    def test_scenario(self):
        """Remove 1, remove 2, reinsert 2, reinsert 1 on a ring of 7."""
        ring = Items(7)

        ring.item(1).remove()
        assert len(ring) == 6
        assert ring.order() == [2, 3, 4, 5, 6, 7]

        ring.item(2).remove()
        assert len(ring) == 5

        ring.item(2).reinsert()
        assert len(ring) == 6
        assert ring.order() == [2, 3, 4, 5, 6, 7]

        ring.item(1).reinsert()
        assert len(ring) == 7
        assert ring.order() == [1, 2, 3, 4, 5, 6, 7]

    def test_empty_then_restore(self):
        """Removing all items and reinserting in reverse restores the ring."""
        ring = Items(7)
        for i in range(1, 8):
            ring.item(i).remove()
        assert ring.items().count() == 0

        for i in range(7, 0, -1):
            ring.item(i).reinsert()
        assert ring.items().count() == 7
        assert ring == Items(7)

    def test_random_round_trip(self):
        """Any removal sequence undone in reverse restores the array exactly."""
        rng = np.random.default_rng(7)
        ring = Items(50)
        before = ring.snapshot()
        order = rng.permutation(np.arange(1, 51))[:30]

        for i in order:
            ring.item(int(i)).remove()
        assert len(ring) == 20
        for i in order[::-1]:
            ring.item(int(i)).reinsert()

        assert before.tolist() == ring.nodes.tolist()

    def test_out_of_order_reinsert_raises(self):
        """Reinserting in removal order is rejected, leaving the ring intact."""
        ring = Items(7)
        ring.item(1).remove()
        ring.item(2).remove()
        before = ring.snapshot()

        with pytest.raises(ReinsertionOrderError):
            ring.item(1).reinsert()
        assert before.tolist() == ring.nodes.tolist()
        assert ring.removed == (1, 2)

    def test_reinsert_live_item_raises(self):
        """Reinserting an item that was never removed raises."""
        with pytest.raises(ItemStateError):
            Items(3).item(2).reinsert()

    def test_stale_cursor_reinsert_raises(self):
        """A cursor built before a neighbour was removed cannot reinsert."""
        ring = Items(5)
        stale = ring.item(3)
        ring.item(2).remove()
        ring.item(3).remove()
        before = ring.snapshot()

        with pytest.raises(ItemStateError):
            stale.reinsert()
        assert before.tolist() == ring.nodes.tolist()
        assert ring.removed == (2, 3)

        ring.item(3).reinsert()
        ring.item(2).reinsert()
        assert ring == Items(5)

    def test_checkpoint_rollback(self):
        """rollback() undoes removals made after the checkpoint."""
        ring = Items(6)
        ring.item(2).remove()
        mark = ring.checkpoint()
        ring.item(5).remove()
        ring.item(3).remove()
        assert ring.order() == [1, 4, 6]

        ring.rollback(mark)
        assert ring.order() == [1, 3, 4, 5, 6]
        assert ring.removed == (2,)

        ring.rollback()
        assert ring == Items(6)

    def test_rollback_bad_mark(self):
        """A mark beyond the current depth is rejected."""
        ring = Items(3)
        with pytest.raises(ValueError):
            ring.rollback(1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
