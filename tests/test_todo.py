"""Unit tests for todo.py."""

from pomotodo.todo import TodoItem, TodoList


def titles(todos: TodoList):
    return [item.title for item in todos]


class TestAddItem:
    """Test adding items."""

    def test_empty_title_ignored(self):
        """Blank titles leave the list unchanged."""
        todos = TodoList()
        assert todos.add_item("") is None
        assert todos.add_item("   ") is None
        assert len(todos) == 0

    def test_add_appends_open_item(self):
        """A new item is appended, not completed."""
        todos = TodoList()
        todos.add_item("Wash car")
        item = todos.add_item("Buy milk")
        assert item is not None
        assert item.is_completed is False
        assert titles(todos) == ["Wash car", "Buy milk"]
        assert todos.items[-1] is item

    def test_ids_are_unique(self):
        """Every item gets its own id."""
        todos = TodoList()
        first = todos.add_item("a")
        second = todos.add_item("a")
        assert first.id != second.id

    def test_item_defaults(self):
        """TodoItem starts open with an id."""
        item = TodoItem(title="x")
        assert item.is_completed is False
        assert item.id


class TestToggle:
    """Test toggling completion."""

    def test_toggle_twice_restores(self):
        """Toggling twice returns to the original state."""
        todos = TodoList()
        item = todos.add_item("Buy milk")
        assert todos.toggle_completion(item.id) is True
        assert todos.get(item.id).is_completed is True
        todos.toggle_completion(item.id)
        assert todos.get(item.id).is_completed is False

    def test_toggle_unknown_id(self):
        """Unknown ids are ignored."""
        todos = TodoList()
        todos.add_item("Buy milk")
        assert todos.toggle_completion("missing") is False
        assert [item.is_completed for item in todos] == [False]


class TestDelete:
    """Test deleting items."""

    def test_delete_by_id_keeps_order(self):
        """Deleting removes only that item and keeps the order of the rest."""
        todos = TodoList()
        a = todos.add_item("a")
        b = todos.add_item("b")
        c = todos.add_item("c")
        assert todos.delete_items([b.id]) == 1
        assert [item.id for item in todos] == [a.id, c.id]

    def test_delete_unknown_id(self):
        """Unknown ids are skipped."""
        todos = TodoList()
        todos.add_item("a")
        assert todos.delete_items(["missing"]) == 0
        assert titles(todos) == ["a"]

    def test_delete_at_offsets(self):
        """Positional deletion removes several items at once."""
        todos = TodoList()
        for title in "abcde":
            todos.add_item(title)
        assert todos.delete_at([0, 3, 9]) == 2
        assert titles(todos) == ["b", "c", "e"]

    def test_items_is_a_copy(self):
        """Mutating the returned list does not change the model."""
        todos = TodoList()
        todos.add_item("a")
        todos.items.clear()
        assert len(todos) == 1
