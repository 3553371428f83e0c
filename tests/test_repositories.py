"""Tests for the SQLAlchemy repositories."""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from todoapi.errors import ConstraintError, DatabaseError, NotFoundError
from todoapi.repositories import (
    CategoryChanges,
    NewCategory,
    NewTodo,
    SQLCategoryRepository,
    SQLTodoRepository,
    TodoChanges,
)


@pytest.fixture
def categories(test_session):
    return SQLCategoryRepository(test_session)


@pytest.fixture
def todos(test_session):
    return SQLTodoRepository(test_session)


class TestCategoryRepository:
    """Tests for SQLCategoryRepository."""

    @pytest.mark.asyncio
    async def test_create_category(self, categories):
        """Test creating a category assigns id, color and timestamps."""
        category = await categories.create(NewCategory(name="Work"))

        assert isinstance(category.id, uuid.UUID)
        assert category.name == "Work"
        assert category.color == "#6c757d"
        assert category.created_at == category.updated_at

    @pytest.mark.asyncio
    async def test_empty_description_is_not_stored(self, categories):
        """Test an empty description is stored as absent."""
        category = await categories.create(NewCategory(name="Home", description=""))

        assert category.description is None

    @pytest.mark.asyncio
    async def test_get_all_oldest_first(self, categories):
        """Test categories are listed by creation time."""
        first = await categories.create(NewCategory(name="First"))
        second = await categories.create(NewCategory(name="Second"))
        third = await categories.create(NewCategory(name="Third"))

        listed = await categories.get_all()

        assert [c.id for c in listed] == [first.id, second.id, third.id]

    @pytest.mark.asyncio
    async def test_get_by_id(self, categories):
        """Test getting a category by ID."""
        created = await categories.create(NewCategory(name="Find me"))

        found = await categories.get_by_id(created.id)

        assert found.id == created.id
        assert found.name == "Find me"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, categories):
        """Test a missing category is reported as NotFoundError."""
        with pytest.raises(NotFoundError):
            await categories.get_by_id(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_exists(self, categories):
        """Test the existence probe."""
        created = await categories.create(NewCategory(name="Here"))

        assert await categories.exists(created.id) is True
        assert await categories.exists(uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_update_leaves_unset_fields(self, categories):
        """Test only supplied fields change and updated_at moves forward."""
        created = await categories.create(
            NewCategory(name="Old", description="Keep me", color="#112233")
        )
        before = created.updated_at

        updated = await categories.update(created.id, CategoryChanges(name="New"))

        assert updated.name == "New"
        assert updated.description == "Keep me"
        assert updated.color == "#112233"
        assert updated.updated_at > before

    @pytest.mark.asyncio
    async def test_update_clears_description(self, categories):
        """Test a None change clears the description."""
        created = await categories.create(NewCategory(name="Cat", description="Old"))

        updated = await categories.update(
            created.id, CategoryChanges(name="Cat", description=None)
        )

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, categories):
        """Test updating a missing category."""
        with pytest.raises(NotFoundError):
            await categories.update(uuid.uuid4(), CategoryChanges(name="Nope"))

    @pytest.mark.asyncio
    async def test_invalid_color_raises_constraint_error(self, categories):
        """Test a storage-level CHECK failure is classified as ConstraintError."""
        with pytest.raises(ConstraintError):
            await categories.create(NewCategory(name="Bad", color="#GGGGGG"))

    @pytest.mark.asyncio
    async def test_delete(self, categories):
        """Test deleting a category, then deleting it again."""
        created = await categories.create(NewCategory(name="Delete me"))

        await categories.delete(created.id)

        assert await categories.exists(created.id) is False
        with pytest.raises(NotFoundError):
            await categories.delete(created.id)

    @pytest.mark.asyncio
    async def test_delete_clears_todo_category(self, categories, todos):
        """Test todos of a deleted category survive with no category."""
        category = await categories.create(NewCategory(name="Gone soon"))
        todo = await todos.create(NewTodo(title="Survivor", category_id=category.id))

        await categories.delete(category.id)

        reloaded = await todos.get_by_id(todo.id)
        assert reloaded.category_id is None

    @pytest.mark.asyncio
    async def test_driver_failure_raises_database_error(self, test_session, categories):
        """Test other driver failures are classified as DatabaseError."""
        test_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await categories.get_all()


class TestTodoRepository:
    """Tests for SQLTodoRepository."""

    @pytest.mark.asyncio
    async def test_create_todo(self, todos):
        """Test creating a todo via the repository."""
        todo = await todos.create(NewTodo(title="Repository test", description="Details"))

        assert isinstance(todo.id, uuid.UUID)
        assert todo.title == "Repository test"
        assert todo.description == "Details"
        assert todo.completed is False
        assert todo.category_id is None

    @pytest.mark.asyncio
    async def test_create_with_missing_category(self, todos):
        """Test the foreign key violation is classified as ConstraintError."""
        with pytest.raises(ConstraintError):
            await todos.create(NewTodo(title="Orphan", category_id=uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_session_usable_after_constraint_error(self, todos):
        """Test the repository rolls back so later calls still work."""
        with pytest.raises(ConstraintError):
            await todos.create(NewTodo(title="Orphan", category_id=uuid.uuid4()))

        todo = await todos.create(NewTodo(title="Fine"))

        assert await todos.exists(todo.id)

    @pytest.mark.asyncio
    async def test_get_all_oldest_first(self, todos):
        """Test todos are listed by creation time."""
        first = await todos.create(NewTodo(title="Todo 1"))
        second = await todos.create(NewTodo(title="Todo 2"))

        listed = await todos.get_all()

        assert [t.id for t in listed] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update_todo(self, todos, categories):
        """Test updating title, completion and category together."""
        category = await categories.create(NewCategory(name="Work"))
        todo = await todos.create(NewTodo(title="Original", description="Keep"))

        updated = await todos.update(
            todo.id,
            TodoChanges(title="Updated", completed=True, category_id=category.id),
        )

        assert updated.title == "Updated"
        assert updated.completed is True
        assert updated.category_id == category.id
        assert updated.description == "Keep"

    @pytest.mark.asyncio
    async def test_update_clears_optional_fields(self, todos, categories):
        """Test None changes clear description and category."""
        category = await categories.create(NewCategory(name="Work"))
        todo = await todos.create(
            NewTodo(title="Full", description="Old", category_id=category.id)
        )

        updated = await todos.update(
            todo.id, TodoChanges(title="Full", description=None, category_id=None)
        )

        assert updated.description is None
        assert updated.category_id is None

    @pytest.mark.asyncio
    async def test_updated_at_is_monotonic(self, todos):
        """Test every update moves updated_at forward."""
        todo = await todos.create(NewTodo(title="Tick"))
        seen = [todo.updated_at]

        for i in range(3):
            todo = await todos.update(todo.id, TodoChanges(title=f"Tock {i}"))
            seen.append(todo.updated_at)

        assert seen == sorted(seen)
        assert len(set(seen)) == len(seen)

    @pytest.mark.asyncio
    async def test_delete_todo(self, todos):
        """Test deleting a todo."""
        todo = await todos.create(NewTodo(title="Delete me"))

        await todos.delete(todo.id)

        with pytest.raises(NotFoundError):
            await todos.get_by_id(todo.id)
