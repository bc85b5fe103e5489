"""Tests for OptionAsync."""

import asyncio

import pytest

from klaw_outcome import Err, Nothing, Ok, OptionAsync, OptionUnwrapError, ResultAsync, Some


async def double_async(x: int) -> int:
    await asyncio.sleep(0)
    return x * 2


async def is_even_async(x: int) -> bool:
    return x % 2 == 0


class TestConstruction:
    """Tests for OptionAsync constructors."""

    @pytest.mark.asyncio
    async def test_await_coroutine(self):
        """Test wrapping a coroutine that yields an Option."""

        async def find():
            return Some('found')

        assert await OptionAsync(find()) == Some('found')

    @pytest.mark.asyncio
    async def test_from_some_and_nothing(self):
        """Test the already-resolved constructors."""
        assert await OptionAsync.from_some(1) == Some(1)
        assert await OptionAsync.from_nothing() == Nothing

    @pytest.mark.asyncio
    async def test_from_option(self):
        """Test lifting a plain Option."""
        assert await OptionAsync.from_option(Some(1)) == Some(1)
        assert await OptionAsync.from_option(Nothing) == Nothing

    @pytest.mark.asyncio
    async def test_from_option_awaitable(self):
        """Test lifting an awaitable that yields an Option."""

        async def find():
            return Nothing

        assert await OptionAsync.from_option(find()) == Nothing

    @pytest.mark.asyncio
    async def test_from_nullable(self):
        """Test that None, awaited or not, becomes Nothing."""

        async def lookup():
            return None

        assert await OptionAsync.from_nullable('x') == Some('x')
        assert await OptionAsync.from_nullable(None) == Nothing
        assert await OptionAsync.from_nullable(lookup()) == Nothing

    @pytest.mark.asyncio
    async def test_from_awaitable(self):
        """Test that a raising awaitable becomes Nothing."""

        async def fail():
            raise OSError('gone')

        assert await OptionAsync.from_awaitable(double_async(2)) == Some(4)
        assert await OptionAsync.from_awaitable(fail()) == Nothing

    @pytest.mark.asyncio
    async def test_from_awaitable_uncaught_propagates(self):
        """Test that exceptions outside the catch tuple propagate."""

        async def fail():
            raise KeyError('k')

        with pytest.raises(KeyError):
            await OptionAsync.from_awaitable(fail(), exceptions=(OSError,))

    @pytest.mark.asyncio
    async def test_try(self):
        """Test try_ with sync and async functions."""
        assert await OptionAsync.try_(lambda: double_async(3)) == Some(6)
        assert await OptionAsync.try_(lambda: int('x')) == Nothing


class TestTransform:
    """Tests for map, filter, inspect."""

    @pytest.mark.asyncio
    async def test_map_sync_and_async(self):
        """Test chaining sync and async map callbacks."""
        assert await OptionAsync.from_some(2).map(lambda x: x + 1).map(double_async) == Some(6)

    @pytest.mark.asyncio
    async def test_map_nothing_never_calls(self, counter):
        """Test that map skips its callback on Nothing."""
        assert await OptionAsync.from_nothing().map(counter) == Nothing
        assert counter.count == 0

    @pytest.mark.asyncio
    async def test_filter_async_predicate(self):
        """Test filter with an async predicate."""
        assert await OptionAsync.from_some(4).filter(is_even_async) == Some(4)
        assert await OptionAsync.from_some(3).filter(is_even_async) == Nothing

    @pytest.mark.asyncio
    async def test_filter_nothing_skips_predicate(self, counter):
        """Test that filter never calls the predicate on Nothing."""
        assert await OptionAsync.from_nothing().filter(counter) == Nothing
        assert counter.count == 0

    @pytest.mark.asyncio
    async def test_inspect(self, counter):
        """Test that inspect sees only Some values."""
        assert await OptionAsync.from_some(1).inspect(counter) == Some(1)
        assert await OptionAsync.from_nothing().inspect(counter) == Nothing
        assert counter.calls == [(1,)]

    @pytest.mark.asyncio
    async def test_awaiting_twice_runs_callback_once(self, counter):
        """Test that a handle resolves once no matter how often it is awaited."""
        handle = OptionAsync.from_some(1).map(counter)
        assert await handle == await handle
        assert counter.count == 1


class TestChaining:
    """Tests for and_then, or_else, and_, or_, xor."""

    @pytest.mark.asyncio
    async def test_and_then_variants(self):
        """Test and_then with Option, coroutine and OptionAsync callbacks."""

        async def find(x):
            return Some(x * 10)

        assert await OptionAsync.from_some(1).and_then(lambda x: Some(x + 1)) == Some(2)
        assert await OptionAsync.from_some(1).and_then(find) == Some(10)
        assert await OptionAsync.from_some(1).and_then(lambda x: OptionAsync.from_nothing()) == Nothing

    @pytest.mark.asyncio
    async def test_and_then_short_circuits(self, counter):
        """Test that and_then skips its callback on Nothing."""
        assert await OptionAsync.from_nothing().and_then(counter) == Nothing
        assert counter.count == 0

    @pytest.mark.asyncio
    async def test_or_else(self, counter):
        """Test that or_else only runs its callback on Nothing."""
        assert await OptionAsync.from_nothing().or_else(lambda: OptionAsync.from_some(9)) == Some(9)
        assert await OptionAsync.from_some(1).or_else(counter) == Some(1)
        assert counter.count == 0

    @pytest.mark.asyncio
    async def test_and_or(self):
        """Test the eager and_/or_ combinators."""
        assert await OptionAsync.from_some(1).and_(OptionAsync.from_some(2)) == Some(2)
        assert await OptionAsync.from_nothing().and_(OptionAsync.from_some(2)) == Nothing
        assert await OptionAsync.from_some(1).or_(OptionAsync.from_some(2)) == Some(1)
        assert await OptionAsync.from_nothing().or_(OptionAsync.from_some(2)) == Some(2)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ('left', 'right', 'expected'),
        [
            (Some(1), Nothing, Some(1)),
            (Nothing, Some(2), Some(2)),
            (Some(1), Some(2), Nothing),
            (Nothing, Nothing, Nothing),
        ],
    )
    async def test_xor(self, left, right, expected):
        """Test xor over every combination of variants."""
        result = await OptionAsync.from_option(left).xor(OptionAsync.from_option(right))
        assert result == expected


class TestStructural:
    """Tests for flatten, zip, zip_with and Result conversion."""

    @pytest.mark.asyncio
    async def test_flatten(self):
        """Test flatten on nested Option and nested OptionAsync payloads."""
        assert await OptionAsync.from_some(Some(1)).flatten() == Some(1)
        assert await OptionAsync.from_some(Nothing).flatten() == Nothing
        assert await OptionAsync.from_nothing().flatten() == Nothing
        assert await OptionAsync.from_some(OptionAsync.from_some(2)).flatten() == Some(2)

    @pytest.mark.asyncio
    async def test_zip(self):
        """Test zip pairs values and fails on Nothing."""
        assert await OptionAsync.from_some(1).zip(OptionAsync.from_some('a')) == Some((1, 'a'))
        assert await OptionAsync.from_some(1).zip(OptionAsync.from_nothing()) == Nothing

    @pytest.mark.asyncio
    async def test_zip_with(self):
        """Test zip_with with an async combiner."""

        async def add(a, b):
            return a + b

        assert await OptionAsync.from_some(1).zip_with(OptionAsync.from_some(2), add) == Some(3)
        assert await OptionAsync.from_nothing().zip_with(OptionAsync.from_some(2), add) == Nothing

    @pytest.mark.asyncio
    async def test_ok_or(self):
        """Test that ok_or bridges to a ResultAsync."""
        handle = OptionAsync.from_nothing().ok_or('missing')
        assert isinstance(handle, ResultAsync)
        assert await handle == Err('missing')
        assert await OptionAsync.from_some(1).ok_or('missing') == Ok(1)

    @pytest.mark.asyncio
    async def test_ok_or_else_async(self):
        """Test ok_or_else with an async error factory."""

        async def make_error():
            return 'computed'

        assert await OptionAsync.from_nothing().ok_or_else(make_error) == Err('computed')


class TestTerminal:
    """Tests for terminal methods."""

    @pytest.mark.asyncio
    async def test_queries(self):
        """Test the boolean queries with async predicates."""
        assert await OptionAsync.from_some(1).is_some()
        assert await OptionAsync.from_nothing().is_none()
        assert await OptionAsync.from_some(4).is_some_and(is_even_async)
        assert not await OptionAsync.from_nothing().is_some_and(is_even_async)
        assert await OptionAsync.from_nothing().is_none_or(is_even_async)
        assert not await OptionAsync.from_some(3).is_none_or(is_even_async)

    @pytest.mark.asyncio
    async def test_unwrap(self):
        """Test unwrap returns the value or raises on Nothing."""
        assert await OptionAsync.from_some(1).unwrap() == 1
        with pytest.raises(OptionUnwrapError):
            await OptionAsync.from_nothing().unwrap()

    @pytest.mark.asyncio
    async def test_expect_message_verbatim(self):
        """Test expect uses the caller's message as is."""
        with pytest.raises(OptionUnwrapError) as exc_info:
            await OptionAsync.from_nothing().expect('user must exist')
        assert str(exc_info.value) == 'user must exist'

    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test unwrap_or and unwrap_or_else with an async fallback."""

        async def fallback():
            return 7

        assert await OptionAsync.from_nothing().unwrap_or(0) == 0
        assert await OptionAsync.from_nothing().unwrap_or_else(fallback) == 7
        assert await OptionAsync.from_some(1).unwrap_or_else(fallback) == 1

    @pytest.mark.asyncio
    async def test_unwrap_or_default(self):
        """Test unwrap_or_default yields the value or None."""
        assert await OptionAsync.from_some(1).unwrap_or_default() == 1
        assert await OptionAsync.from_nothing().unwrap_or_default() is None

    @pytest.mark.asyncio
    async def test_map_or(self):
        """Test map_or and map_or_else with an async mapper."""
        assert await OptionAsync.from_some(2).map_or(0, double_async) == 4
        assert await OptionAsync.from_nothing().map_or_else(lambda: -1, double_async) == -1

    @pytest.mark.asyncio
    async def test_match(self):
        """Test match dispatches to the right branch."""
        some = await OptionAsync.from_some(2).match(some=double_async, nothing=lambda: 0)
        nothing = await OptionAsync.from_nothing().match(some=double_async, nothing=lambda: 0)
        assert (some, nothing) == (4, 0)

    @pytest.mark.asyncio
    async def test_to_future(self):
        """Test to_future resolves to the wrapped Option."""
        assert await OptionAsync.from_some(1).to_future() == Some(1)
