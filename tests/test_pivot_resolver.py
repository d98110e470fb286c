"""Tests for pivot resolution."""

from unittest.mock import MagicMock

import pytest

from conftest import INCEPTION, NOLAN
from query_resolver.domain.errors import BackendUnavailable, ResolutionFailure
from query_resolver.domain.models import Binding, BindingKind, RankStrategy, Scores
from query_resolver.services.pivot_resolver import PivotResolver

I1 = Binding(BindingKind.INSTANCE, "I1", "Inception")


def test_instance_is_searched_and_memoized(searcher, builder):
    resolver = PivotResolver(searcher)

    pivot = resolver.resolve(I1, builder)

    assert pivot == INCEPTION
    assert builder.get_solutions(I1) == [INCEPTION]
    assert len(searcher.calls) == 1


def test_instance_search_uses_lexical_auto_threshold(searcher, builder):
    PivotResolver(searcher).resolve(I1, builder)

    kind, term, rank = searcher.calls[0]
    assert (kind, term) == ("instance", "Inception")
    assert rank.strategy == RankStrategy.LEVENSHTEIN
    assert rank.is_auto_threshold


def test_configured_threshold_is_passed_through(searcher, builder):
    PivotResolver(searcher, threshold=0.8).resolve(I1, builder)
    assert searcher.calls[0][2].threshold == 0.8


def test_second_resolution_is_memoized(searcher, builder):
    resolver = PivotResolver(searcher)

    first = resolver.resolve(I1, builder)
    second = resolver.resolve(I1, builder)

    assert first is second
    assert len(searcher.calls) == 1


def test_memoized_solution_returned_without_search(searcher, builder):
    builder.add(I1, NOLAN)
    assert PivotResolver(searcher).resolve(I1, builder) == NOLAN
    assert searcher.calls == []


@pytest.mark.parametrize(
    "kind", [BindingKind.VARIABLE, BindingKind.TYPE, BindingKind.CLASS, BindingKind.PROPERTY]
)
def test_non_instance_yields_no_pivot(searcher, builder, kind):
    binding = Binding(kind, "X1", "director")
    assert PivotResolver(searcher).resolve(binding, builder) is None
    assert searcher.calls == []


def test_empty_result_is_a_resolution_failure(searcher, builder):
    unknown = Binding(BindingKind.INSTANCE, "I9", "Nowhere Film")

    with pytest.raises(ResolutionFailure) as exc:
        PivotResolver(searcher).resolve(unknown, builder)

    assert exc.value.placeholder == "I9"
    assert exc.value.term == "Nowhere Film"
    assert exc.value.strategy == "levenshtein"
    assert not builder.is_resolved(unknown)


def test_backend_exception_becomes_backend_unavailable(builder):
    backend = MagicMock()
    backend.instance_search.side_effect = ConnectionError("index down")

    with pytest.raises(BackendUnavailable) as exc:
        PivotResolver(backend).resolve(I1, builder)

    assert exc.value.operation == "instance_search"
    assert isinstance(exc.value.cause, ConnectionError)


def test_backend_domain_errors_propagate_unchanged(builder):
    backend = MagicMock()
    raised = BackendUnavailable("unknown database", operation="instance_search")
    backend.instance_search.side_effect = raised

    with pytest.raises(BackendUnavailable) as exc:
        PivotResolver(backend).resolve(I1, builder)
    assert exc.value is raised


def test_search_params_carry_db_and_limit(builder):
    backend = MagicMock()
    backend.instance_search.return_value = Scores()

    with pytest.raises(ResolutionFailure):
        PivotResolver(backend, db_id="movies", limit=3).resolve(I1, builder)

    params, _rank = backend.instance_search.call_args.args
    assert (params.db_id, params.term, params.limit) == ("movies", "Inception", 3)
