"""Tests for pipe composition."""

import pytest

from pipedsp import Pipe, Role, UnitPipe, drive, roles_of
from pipedsp.filters import Add, Convolve, Identity, Median, Mul, Neg
from pipedsp.sinks import Collect, Last, Mean
from pipedsp.sources import FromIter, Increment, Take


class TestRoles:
    """Tests for the role table."""

    def test_filter_filter(self):
        """Two filters compose into a filter."""
        assert roles_of(Pipe(Neg(), Neg())) == Role.FILTER

    def test_source_filter(self):
        """A source followed by a filter is a source."""
        assert roles_of(Pipe(Increment(), Neg())) == Role.SOURCE

    def test_filter_sink(self):
        """A filter followed by a plain sink is a sink."""
        assert roles_of(Pipe(Neg(), Collect())) == Role.SINK | Role.FINALIZE

    def test_filter_accumulator(self):
        """Every matching row applies."""
        pipe = Pipe(Neg(), Mean())
        assert pipe.roles == Role.FILTER | Role.SINK | Role.FINALIZE

    def test_source_finalize(self):
        """A source into an accumulator is a source and finalizer."""
        pipe = Pipe(Increment(), Last())
        assert pipe.roles == Role.SOURCE | Role.FINALIZE

    def test_invalid_composition(self):
        """Endpoints matching no rule are rejected."""
        with pytest.raises(TypeError, match="Cannot pipe"):
            Pipe(Collect(), Neg())

    def test_source_into_source(self):
        """Two sources cannot be piped."""
        with pytest.raises(TypeError):
            Pipe(Increment(), Increment())

    def test_unsupported_operation(self):
        """Calling an operation outside the pipe's roles raises TypeError."""
        pipe = Pipe(Increment(), Neg())
        with pytest.raises(TypeError, match="does not support filter"):
            pipe.filter(1)
        with pytest.raises(TypeError, match="does not support sink"):
            pipe.sink(1)


class TestDataFlow:
    """Tests for sample flow through pipes."""

    def test_filter_order(self):
        """lhs runs before rhs."""
        pipe = Pipe(Add(rhs=1), Mul(rhs=2))
        assert pipe.filter(3) == 8

    def test_or_operator(self):
        """a | b builds Pipe(a, b)."""
        pipe = Add(rhs=1) | Mul(rhs=2)
        assert isinstance(pipe, Pipe)
        assert pipe.filter(3) == 8

    def test_associativity(self):
        """(a | b) | c and a | (b | c) produce the same outputs."""
        inputs = [5.0, 1.0, 9.0, 3.0, 7.0, 2.0]
        left = (Median(width=3) | Add(rhs=1.0)) | Convolve(coefficients=(0.5, 0.5))
        right = Median(width=3) | (Add(rhs=1.0) | Convolve(coefficients=(0.5, 0.5)))
        assert [left.filter(x) for x in inputs] == [right.filter(x) for x in inputs]

    def test_composition_matches_manual_chain(self):
        """A pipe equals feeding one stage's outputs into the next."""
        inputs = [3.0, 8.0, 1.0, 4.0, 4.0, 9.0]
        f, g = Median(width=3), Convolve(coefficients=(1.0, -1.0))
        expected = [g.filter(f.filter(x)) for x in inputs]
        pipe = Median(width=3) | Convolve(coefficients=(1.0, -1.0))
        assert [pipe.filter(x) for x in inputs] == expected

    def test_source_pipe(self):
        """A source pipe applies the filter to each sourced value."""
        pipe = Take(Increment(), count=4) | Mul(rhs=10)
        assert list(pipe) == [0, 10, 20, 30]
        assert pipe.source() is None

    def test_sink_pipe(self):
        """A sink pipe filters before sinking."""
        pipe = Neg() | Collect()
        for x in [1, 2, 3]:
            pipe.sink(x)
        assert pipe.finalize() == [-1, -2, -3]

    def test_drive_into_pipe(self):
        """drive pumps a source through a sink pipe."""
        result = drive(FromIter([1.0, 2.0, 3.0]), Mul(rhs=2.0) | Mean())
        assert result == 4.0

    def test_iterating_non_source(self):
        """Only source pipes can be iterated."""
        with pytest.raises(TypeError):
            iter(Pipe(Neg(), Neg())).__next__()


class TestUnitPipe:
    """Tests for the identity wrapper."""

    def test_forwards_roles(self):
        """UnitPipe copies its inner roles."""
        assert UnitPipe(Median()).roles == Role.FILTER
        assert UnitPipe(Increment()).roles == Role.SOURCE

    def test_chain(self):
        """UnitPipe starts a left-associative chain."""
        pipe = UnitPipe(Identity()) | Add(rhs=1) | Mul(rhs=3)
        assert isinstance(pipe.lhs, Pipe)
        assert isinstance(pipe.lhs.lhs, UnitPipe)
        assert pipe.filter(1) == 6

    def test_rejects_non_stage(self):
        """Objects without roles cannot be wrapped."""
        with pytest.raises(TypeError, match="not a pipeline stage"):
            UnitPipe(object())

    def test_unit_source_chain(self):
        """Sources may start a chain too."""
        pipe = UnitPipe(Take(Increment(start=1), count=3)) | Neg()
        assert list(pipe) == [-1, -2, -3]


class TestReset:
    """Tests for resetting pipes."""

    def test_reset_rebuilds_both_sides(self):
        """A reset pipe replays from the initial state."""
        pipe = Median(width=3) | Convolve(coefficients=(1.0, -1.0))
        inputs = [4.0, 1.0, 6.0, 2.0, 8.0]
        first = [pipe.filter(x) for x in inputs]
        fresh = pipe.reset()
        assert [fresh.filter(x) for x in inputs] == first

    def test_reset_source_pipe(self):
        """Resetting a source pipe restarts the source."""
        pipe = FromIter([1, 2, 3]) | Neg()
        assert list(pipe) == [-1, -2, -3]
        assert list(pipe.reset()) == [-1, -2, -3]

    def test_guts_roundtrip(self):
        """from_guts rebuilds a pipe around the same endpoints."""
        pipe = Add(rhs=1) | Neg()
        rebuilt = Pipe.from_guts(pipe.into_guts())
        assert rebuilt.lhs is pipe.lhs
        assert rebuilt.filter(1) == -2
