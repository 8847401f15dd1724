"""Tests for SequenceFuture combinators."""

from dataclasses import dataclass

import pytest

from aiochain.exceptions import EmptySequenceError
from aiochain.sequences import Grouping, SequenceFuture
from tests.utils import CallCounter, wait_and_return

ELEMENTS = ["hello world", "please", "do it now", "cuz"]
AGGREGATE_SEED = 100


@dataclass(frozen=True)
class Person:
    """Person."""

    name: str
    age: int


@dataclass(frozen=True)
class TodoItem:
    """Todo list item."""

    name: str
    is_done: bool


PERSONS = [Person("bob", 5), Person("sarah", 16), Person("john", 20), Person("isaac", 26)]

TODO_LISTS = [
    [TodoItem("Clean the house", is_done=False), TodoItem("Walk out the dog", is_done=True)],
    [TodoItem("Dance in the living room", is_done=True), TodoItem("Prepare dinner", is_done=False)],
]


def words() -> SequenceFuture[str]:
    """Future of the test words."""
    return SequenceFuture.from_value(list(ELEMENTS))


class TestFilterAsync:
    """Tests for SequenceFuture.filter_async."""

    @pytest.mark.asyncio
    async def test_filters_elements(self) -> None:
        """Test filtering with a synchronous predicate."""
        assert await words().filter_async(lambda x: " " in x) == ("hello world", "do it now")

    @pytest.mark.asyncio
    async def test_filters_with_asynchronous_predicate(self) -> None:
        """Test filtering with an asynchronous predicate."""
        assert await words().filter_async(lambda x: wait_and_return(" " in x)) == ("hello world", "do it now")

    @pytest.mark.asyncio
    async def test_predicate_runs_only_on_resolution(self) -> None:
        """Test that the predicate is called once per element, only when resolved."""
        predicate = CallCounter(lambda x: " " in x)

        filtered = words().filter_async(predicate)
        assert predicate.calls == 0

        await filtered.enumerate_async()
        assert predicate.calls == len(ELEMENTS)
        assert predicate.arguments == ELEMENTS

    @pytest.mark.asyncio
    async def test_can_be_chained(self) -> None:
        """Test chaining filters; later predicates only see surviving elements."""
        last_predicate = CallCounter(lambda x: x.endswith("w"))

        results = await (
            words()
            .filter_async(lambda _: True)
            .filter_async(lambda x: " " in x)
            .filter_async(last_predicate)
            .enumerate_async()
        )

        assert results == ("do it now",)
        assert last_predicate.calls == 2

    @pytest.mark.asyncio
    async def test_predicate_failure_propagates(self) -> None:
        """Test that a failing predicate surfaces unchanged."""
        error = LookupError("bad element")

        def predicate(x: str) -> bool:
            if x == "please":
                raise error
            return True

        with pytest.raises(LookupError) as exc_info:
            await words().filter_async(predicate).enumerate_async()

        assert exc_info.value is error


class TestProjectAsync:
    """Tests for SequenceFuture.project_async."""

    @pytest.mark.asyncio
    async def test_projects_each_element(self) -> None:
        """Test projecting with a synchronous function."""
        assert await words().project_async(len) == (11, 6, 9, 3)

    @pytest.mark.asyncio
    async def test_projects_with_asynchronous_function(self) -> None:
        """Test projecting with an asynchronous function."""
        assert await words().project_async(lambda x: wait_and_return(x.upper())) == (
            "HELLO WORLD",
            "PLEASE",
            "DO IT NOW",
            "CUZ",
        )

    @pytest.mark.asyncio
    async def test_projection_runs_only_on_resolution(self) -> None:
        """Test that the projection is deferred until resolution."""
        projection = CallCounter(len)

        projected = words().project_async(projection)
        assert projection.calls == 0

        await projected
        assert projection.calls == len(ELEMENTS)

    @pytest.mark.asyncio
    async def test_can_be_chained(self) -> None:
        """Test chaining projections."""
        results = await words().project_async(len).project_async(lambda x: x % 2).enumerate_async()

        assert results == (1, 0, 1, 1)


class TestFlattenAsync:
    """Tests for SequenceFuture.flatten_async."""

    @pytest.mark.asyncio
    async def test_flattens_sub_collections(self) -> None:
        """Test concatenating sub-collections in source order."""
        items = await SequenceFuture.from_value(TODO_LISTS).flatten_async(lambda todo_list: todo_list)

        assert [item.name for item in items] == [
            "Clean the house",
            "Walk out the dog",
            "Dance in the living room",
            "Prepare dinner",
        ]

    @pytest.mark.asyncio
    async def test_selector_runs_only_on_resolution(self) -> None:
        """Test that the selector is called once per element, only when resolved."""
        selector = CallCounter(lambda todo_list: todo_list)

        flattened = SequenceFuture.from_value(TODO_LISTS).flatten_async(selector)
        assert selector.calls == 0

        await flattened
        assert selector.calls == len(TODO_LISTS)

    @pytest.mark.asyncio
    async def test_can_be_chained(self) -> None:
        """Test chaining flattening operations."""
        results = await (
            SequenceFuture.from_value(TODO_LISTS)
            .flatten_async(lambda todo_list: todo_list)
            .flatten_async(lambda item: wait_and_return(item.name[:3]))
            .enumerate_async()
        )

        assert "".join(results) == "CleWalDanPre"


class TestGroupByAsync:
    """Tests for SequenceFuture.group_by_async."""

    @pytest.mark.asyncio
    async def test_groups_in_first_seen_key_order(self) -> None:
        """Test stable grouping."""
        groups = await SequenceFuture.from_value(PERSONS).group_by_async(lambda p: p.age // 18)

        assert groups == (
            Grouping(key=0, elements=(Person("bob", 5), Person("sarah", 16))),
            Grouping(key=1, elements=(Person("john", 20), Person("isaac", 26))),
        )

    @pytest.mark.asyncio
    async def test_keeps_relative_order_within_groups(self) -> None:
        """Test interleaved keys."""
        groups = await SequenceFuture.from_value([3, 4, 1, 6, 5, 2]).group_by_async(lambda x: x % 2)

        assert [(group.key, list(group)) for group in groups] == [(1, [3, 1, 5]), (0, [4, 6, 2])]
        assert [len(group) for group in groups] == [3, 3]

    @pytest.mark.asyncio
    async def test_key_selector_runs_only_on_resolution(self) -> None:
        """Test that grouping is deferred until resolution."""
        key_selector = CallCounter(lambda p: p.age // 18)

        grouped = SequenceFuture.from_value(PERSONS).group_by_async(key_selector)
        assert key_selector.calls == 0

        await grouped
        assert key_selector.calls == len(PERSONS)

    @pytest.mark.asyncio
    async def test_can_be_chained(self) -> None:
        """Test grouping groups."""
        results = await (
            SequenceFuture.from_value(PERSONS)
            .group_by_async(lambda p: p.age // 18)
            .group_by_async(lambda group: wait_and_return(group.key % 2))
            .enumerate_async()
        )

        assert [[[p.name for p in inner] for inner in outer] for outer in results] == [
            [["bob", "sarah"]],
            [["john", "isaac"]],
        ]


class TestOrderByAsync:
    """Tests for SequenceFuture.order_by_async."""

    @pytest.mark.asyncio
    async def test_orders_by_natural_order(self) -> None:
        """Test ascending order without a key selector."""
        expected = ("cuz", "do it now", "hello world", "please")

        assert await words().order_by_async() == expected
        assert await words().order_by_async(lambda x: x) == expected

    @pytest.mark.asyncio
    async def test_orders_by_selector(self) -> None:
        """Test ascending order by key."""
        assert await words().order_by_async(len) == ("cuz", "please", "do it now", "hello world")

    @pytest.mark.asyncio
    async def test_orders_descending(self) -> None:
        """Test descending order."""
        expected = ("please", "hello world", "do it now", "cuz")

        assert await words().order_by_descending_async() == expected
        assert await words().order_by_async(descending=True) == expected
        assert await words().order_by_descending_async(len) == ("hello world", "do it now", "please", "cuz")

    @pytest.mark.asyncio
    async def test_orders_with_asynchronous_selector(self) -> None:
        """Test ordering by an asynchronously computed key."""
        assert await words().order_by_async(lambda x: wait_and_return(len(x))) == (
            "cuz",
            "please",
            "do it now",
            "hello world",
        )

    @pytest.mark.asyncio
    async def test_sort_is_stable_in_both_directions(self) -> None:
        """Test that ties keep their original relative order."""
        source = SequenceFuture.from_value(["bb", "a", "cc", "d", "ee"])

        assert await source.order_by_async(len) == ("a", "d", "bb", "cc", "ee")
        assert await source.order_by_descending_async(len) == ("bb", "cc", "ee", "a", "d")


class TestFirstAsync:
    """Tests for SequenceFuture.first_async and first_or_default_async."""

    @pytest.mark.asyncio
    async def test_first_element(self) -> None:
        """Test getting the first element."""
        assert await words().first_async() == "hello world"
        assert await words().first_or_default_async() == "hello world"

    @pytest.mark.asyncio
    async def test_first_matching_element(self) -> None:
        """Test getting the first element matching a predicate."""
        assert await words().first_async(lambda x: " " not in x) == "please"
        assert await words().first_or_default_async(lambda x: wait_and_return(" " not in x)) == "please"

    @pytest.mark.asyncio
    async def test_first_stops_at_match(self) -> None:
        """Test that the predicate is not called after the first match."""
        predicate = CallCounter(lambda x: " " not in x)

        await words().first_async(predicate)

        assert predicate.arguments == ["hello world", "please"]

    @pytest.mark.asyncio
    async def test_first_of_empty_sequence_fails(self) -> None:
        """Test first on an empty collection."""
        empty = SequenceFuture.from_awaitable(wait_and_return([]))

        with pytest.raises(EmptySequenceError, match="Sequence contains no elements"):
            await empty.first_async()

    @pytest.mark.asyncio
    async def test_first_without_match_fails(self) -> None:
        """Test first with a predicate nothing satisfies."""
        with pytest.raises(EmptySequenceError, match="Sequence contains no matching element"):
            await words().first_async(lambda x: x == "missing")

    @pytest.mark.asyncio
    async def test_first_or_default_of_empty_sequence(self) -> None:
        """Test first_or_default on an empty collection."""
        empty = SequenceFuture.from_awaitable(wait_and_return([]))

        assert await empty.first_or_default_async() is None
        assert await empty.first_or_default_async(default="") == ""
        assert await words().first_or_default_async(lambda x: x == "missing", default="none") == "none"

    @pytest.mark.asyncio
    async def test_empty_sequence_error_is_value_error(self) -> None:
        """Test the error taxonomy."""
        with pytest.raises(ValueError, match="no elements"):
            await SequenceFuture.from_value(()).first_async()


class TestAggregateAsync:
    """Tests for SequenceFuture.aggregate_async."""

    @pytest.mark.asyncio
    async def test_aggregate(self) -> None:
        """Test folding from the first element."""
        assert await SequenceFuture.from_value(range(20)).aggregate_async(lambda x, y: x + y) == 190

    @pytest.mark.asyncio
    async def test_aggregate_from_seed(self) -> None:
        """Test folding from a seed."""
        assert await SequenceFuture.from_value(range(20)).aggregate_async(lambda x, y: x + y, AGGREGATE_SEED) == 290

    @pytest.mark.asyncio
    async def test_aggregate_from_seed_with_result_selector(self) -> None:
        """Test folding from a seed and selecting the result."""
        result = await SequenceFuture.from_value(range(20)).aggregate_async(
            lambda x, y: x + y, AGGREGATE_SEED, lambda x: x / 2
        )

        assert result == 145

    @pytest.mark.asyncio
    async def test_aggregate_with_asynchronous_accumulator(self) -> None:
        """Test folding with an asynchronous accumulator."""
        result = await SequenceFuture.from_value(["a", "b", "c"]).aggregate_async(
            lambda acc, x: wait_and_return(acc + x), ">"
        )

        assert result == ">abc"

    @pytest.mark.asyncio
    async def test_aggregate_without_seed_of_empty_sequence_fails(self) -> None:
        """Test seedless folding of an empty collection."""
        with pytest.raises(EmptySequenceError):
            await SequenceFuture.from_value([]).aggregate_async(lambda x, y: x + y)

    @pytest.mark.asyncio
    async def test_aggregate_with_seed_of_empty_sequence(self) -> None:
        """Test that a seed makes folding an empty collection valid."""
        assert await SequenceFuture.from_value([]).aggregate_async(lambda x, y: x + y, 0) == 0


class TestEnumerateAsync:
    """Tests for SequenceFuture.enumerate_async."""

    @pytest.mark.asyncio
    async def test_enumerate_returns_read_only_collection(self) -> None:
        """Test materializing into a tuple."""
        results = await words().enumerate_async()

        assert results == tuple(ELEMENTS)
        assert isinstance(results, tuple)

    @pytest.mark.asyncio
    async def test_source_resolves_once_for_several_chains(self) -> None:
        """Test that chains sharing a source resolve it once."""
        loads: list[int] = []

        async def load() -> list[int]:
            loads.append(1)
            return await wait_and_return(list(range(10)))

        source = SequenceFuture(load)
        evens = source.filter_async(lambda x: x % 2 == 0)
        odds = source.filter_async(lambda x: x % 2 == 1)

        assert await evens.enumerate_async() == (0, 2, 4, 6, 8)
        assert await odds.enumerate_async() == (1, 3, 5, 7, 9)
        assert loads == [1]


class TestChaining:
    """Tests chaining several kinds of operators."""

    @pytest.mark.asyncio
    async def test_chaining_methods(self) -> None:
        """Test a filter, order, project, aggregate chain."""
        result = await (
            SequenceFuture.from_awaitable(wait_and_return(range(100)))
            .filter_async(lambda x: x % 20 == 0)
            .order_by_descending_async(lambda x: x)
            .project_async(lambda x: f"Element is {x}")
            .aggregate_async(lambda x, y: x + ", " + y)
        )

        assert result == "Element is 80, Element is 60, Element is 40, Element is 20, Element is 0"

    @pytest.mark.asyncio
    async def test_map_the_whole_collection(self) -> None:
        """Test mixing collection operators with whole-value mapping."""
        count = await words().filter_async(lambda x: " " in x).map(len)

        assert count == 2
