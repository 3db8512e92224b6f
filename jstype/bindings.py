"""
jstype/bindings.py
══════════════════

Binding State Tracker: what the checker currently believes about each
variable name in one file.

Update policy
─────────────
  declaration   record (or overwrite) the binding; last write wins
  assignment    refresh ``inferred_type`` only, and only on a match;
                ``declared_type`` never changes once set
  lookup        returns the *recorded* inferred type, no re-derivation

A tracker is created per file and discarded with it.

License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from jstype.types import is_complex_type


@dataclass
class Binding:
    """Tracked state of one variable name."""
    name: str
    declared_type: Optional[str]
    inferred_type: str
    is_complex: bool = False


class BindingTracker:
    """
    Mapping from variable name to :class:`Binding`, scoped to one file.

    Usage
    -----
    >>> tracker = BindingTracker()
    >>> _ = tracker.declare("count", "number", "number")
    >>> tracker.resolve("count")
    'number'
    >>> tracker.resolve("other") is None
    True
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Binding] = {}

    def declare(
        self,
        name: str,
        declared_type: Optional[str],
        inferred_type: str,
        is_complex: Optional[bool] = None,
    ) -> Binding:
        """Record *name*, replacing any earlier binding."""
        if is_complex is None:
            is_complex = declared_type is not None and is_complex_type(declared_type)
        binding = Binding(
            name=name,
            declared_type=declared_type,
            inferred_type=inferred_type,
            is_complex=is_complex,
        )
        self._bindings[name] = binding
        return binding

    def refresh(self, name: str, inferred_type: str) -> None:
        """Update the inferred type of an existing binding."""
        binding = self._bindings.get(name)
        if binding is not None:
            binding.inferred_type = inferred_type

    def get(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def resolve(self, name: str) -> Optional[str]:
        """Recorded inferred type of *name*, or ``None`` if untracked."""
        binding = self._bindings.get(name)
        return binding.inferred_type if binding is not None else None

    def reset(self) -> None:
        self._bindings.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[Binding]:
        return iter(list(self._bindings.values()))

    def __len__(self) -> int:
        return len(self._bindings)


__all__ = ["Binding", "BindingTracker"]
