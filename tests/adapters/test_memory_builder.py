"""Tests for the in-memory query builder."""

import pytest

from conftest import DIRECTOR, INCEPTION
from query_resolver.adapters.builder import InMemoryQueryBuilder
from query_resolver.domain.errors import ResolutionStateError
from query_resolver.domain.models import Binding, BindingKind, Triple

I1 = Binding(BindingKind.INSTANCE, "I1", "Inception")
P1 = Binding(BindingKind.PROPERTY, "P1", "director")
VAR = Binding(BindingKind.VARIABLE, "?VAR1", "?VAR1")


def test_unresolved_binding_has_no_solutions():
    builder = InMemoryQueryBuilder()
    assert not builder.is_resolved(I1)
    assert builder.get_solutions(I1) is None


def test_add_records_single_solution():
    builder = InMemoryQueryBuilder()
    builder.add(I1, INCEPTION)
    assert builder.is_resolved(I1)
    assert builder.get_solutions(I1) == [INCEPTION]
    assert len(builder) == 1


def test_second_add_is_rejected():
    builder = InMemoryQueryBuilder()
    builder.add(P1, DIRECTOR)
    with pytest.raises(ResolutionStateError) as exc:
        builder.add(P1, DIRECTOR)
    assert exc.value.placeholder == "P1"


def test_returned_solutions_are_a_copy():
    builder = InMemoryQueryBuilder()
    builder.add(I1, INCEPTION)
    builder.get_solutions(I1).clear()
    assert builder.get_solutions(I1) == [INCEPTION]


def test_build_produces_resolved_query():
    builder = InMemoryQueryBuilder()
    builder.add(I1, INCEPTION)
    builder.add(P1, DIRECTOR)

    query = builder.build([Triple(I1, P1, VAR)])

    assert query.solutions == {I1: INCEPTION, P1: DIRECTOR}
    assert query.render() == "dbr:Inception dbo:director ?VAR1 ."


def test_builders_do_not_share_state():
    first, second = InMemoryQueryBuilder(), InMemoryQueryBuilder()
    first.add(I1, INCEPTION)
    assert not second.is_resolved(I1)
