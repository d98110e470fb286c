"""Binding mapper - Turns placeholder tokens into typed bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence, Union

from ..domain.errors import UnmappedPlaceholderError
from ..domain.models import (
    Binding,
    BindingKind,
    MappingResult,
    Triple,
    TriplePattern,
)

VARIABLE_PREFIX = "?VAR"
TYPE_PREFIX = "TYPE"


@dataclass
class BindingMapper:
    """Maps placeholder tokens to the bindings of one query plan.

    Tokens with a structural prefix (``?VAR``, ``TYPE``) are synthesized
    on the fly; every other token must match a binding placeholder exactly.
    """

    bindings: Sequence[Binding]
    _index: Dict[str, Binding] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # First binding wins on duplicate placeholders
        self._index = {}
        for binding in self.bindings:
            self._index.setdefault(binding.placeholder, binding)

    def map(self, token: str) -> MappingResult:
        if token.startswith(VARIABLE_PREFIX):
            return MappingResult(Binding(BindingKind.VARIABLE, token, token))
        if token.startswith(TYPE_PREFIX):
            return MappingResult(Binding(BindingKind.TYPE, token, token))

        binding = self._index.get(token)
        if binding is None:
            return MappingResult(
                error=UnmappedPlaceholderError(
                    f"Unmapped placeholder '{token}'", placeholder=token
                )
            )
        return MappingResult(binding)

    def to_triple(
        self, pattern: TriplePattern
    ) -> Union[Triple, UnmappedPlaceholderError]:
        """Substitute every token of the pattern.

        Returns:
            The Triple, or the error of the first token that failed to map.
        """
        mapped = []
        for token in pattern.tokens:
            result = self.map(token)
            if not result.is_success:
                assert isinstance(result.error, UnmappedPlaceholderError)
                return result.error
            mapped.append(result.binding)
        return Triple(*mapped)
