"""Tests for OptionCell, the mutable Option handle."""

from klaw_outcome import Nothing, OptionCell, Some


class TestTake:
    """Tests for take and take_if."""

    def test_take_some_empties_cell(self):
        cell = OptionCell(Some(1))
        assert cell.take() == Some(1)
        assert cell.get() == Nothing
        assert cell.is_none()

    def test_take_nothing_is_noop(self):
        cell = OptionCell()
        assert cell.take() == Nothing
        assert cell.get() == Nothing

    def test_take_does_not_mutate_shared_option(self):
        shared = Some(1)
        cell = OptionCell(shared)
        cell.take()
        assert shared == Some(1)

    def test_take_if_matching(self):
        cell = OptionCell(Some(4))
        assert cell.take_if(lambda x: x > 3) == Some(4)
        assert cell.is_none()

    def test_take_if_not_matching(self):
        cell = OptionCell(Some(1))
        assert cell.take_if(lambda x: x > 3) == Nothing
        assert cell.get() == Some(1)


class TestReplace:
    """Tests for replace, including the empty-cell asymmetry."""

    def test_replace_some_returns_old(self):
        cell = OptionCell(Some(1))
        assert cell.replace(2) == Some(1)
        assert cell.get() == Some(2)

    def test_replace_nothing_returns_new_value(self):
        cell = OptionCell(Nothing)
        assert cell.replace(5) == Some(5)
        assert cell.get() == Nothing


class TestDunder:
    """Tests for equality and repr."""

    def test_equality(self):
        assert OptionCell(Some(1)) == OptionCell(Some(1))
        assert OptionCell(Some(1)) != OptionCell(Nothing)

    def test_repr(self):
        assert repr(OptionCell(Some(1))) == 'OptionCell(Some(value=1))'

    def test_is_some(self):
        assert OptionCell(Some(1)).is_some()
        assert not OptionCell().is_some()
