"""
ARIA Labels - stable ids linking elements to their label, description
and error message.

Usage:
    from a11y.aria_labels import AriaLabelRegistry

    registry = AriaLabelRegistry()
    binding = registry.bind("Email", "We never share it", None, owner=email_input)

    apply(email_input, binding.aria_props())      # aria-labelledby, aria-describedby
    apply(label_node, binding.label_props())      # id
    apply(hint_node, binding.description_props()) # id

All three ids are generated on every bind, whether or not the matching
text exists, so an error element can appear later without new ids.
"""

from __future__ import annotations

import itertools
import logging
import random
import weakref
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from core.constants import (
    DESCRIPTION_ID_PREFIX,
    ERROR_ID_PREFIX,
    ID_ALPHABET,
    ID_SUFFIX_LENGTH,
    LABEL_ID_PREFIX,
    PRIORITY_POLITE,
    ROLE_ALERT,
)

if TYPE_CHECKING:
    from core.config import EngineConfig

logger = logging.getLogger(__name__)


class IdAllocator:
    """
    Issues element ids of the form ``<prefix>-<random>-<counter>``.

    The random base-36 part keeps ids unguessable across page fragments;
    the counter makes them unique within the process.
    """

    def __init__(self, suffix_length: int = ID_SUFFIX_LENGTH, rng: Optional[random.Random] = None):
        self._suffix_length = max(ID_SUFFIX_LENGTH, int(suffix_length))
        self._rng = rng or random.Random()
        self._counter = itertools.count(1)

    @property
    def suffix_length(self) -> int:
        return self._suffix_length

    def next_id(self, prefix: str) -> str:
        suffix = "".join(self._rng.choice(ID_ALPHABET) for _ in range(self._suffix_length))
        return f"{prefix}-{suffix}-{next(self._counter)}"


# Process-wide allocator
_id_allocator: Optional[IdAllocator] = None


def get_id_allocator() -> IdAllocator:
    """
    Get the process-wide id allocator.

    Returns:
        IdAllocator singleton
    """
    global _id_allocator
    if _id_allocator is None:
        _id_allocator = IdAllocator()
    return _id_allocator


def reset_id_allocator_for_testing() -> None:
    global _id_allocator
    _id_allocator = None


@dataclass(frozen=True)
class LabelBinding:
    """Id triple plus the cross-reference values derived from present text."""
    label_id: str
    description_id: str
    error_id: str
    labelled_by: Optional[str] = None
    described_by: Optional[str] = None

    def aria_props(self) -> Dict[str, str]:
        """Attributes for the labelled element; absent values are omitted."""
        props: Dict[str, str] = {}
        if self.labelled_by:
            props["aria-labelledby"] = self.labelled_by
        if self.described_by:
            props["aria-describedby"] = self.described_by
        return props

    def label_props(self) -> Dict[str, Any]:
        return {"id": self.label_id}

    def description_props(self) -> Dict[str, Any]:
        return {"id": self.description_id}

    def error_props(self) -> Dict[str, Any]:
        return {"id": self.error_id, "role": ROLE_ALERT, "aria-live": PRIORITY_POLITE}


def _cross_references(
    binding: LabelBinding,
    label: Optional[str],
    description: Optional[str],
    error_message: Optional[str],
) -> LabelBinding:
    described = [
        ref_id
        for ref_id, text in ((binding.description_id, description), (binding.error_id, error_message))
        if text
    ]
    return replace(
        binding,
        labelled_by=binding.label_id if label else None,
        described_by=" ".join(described) or None,
    )


class AriaLabelRegistry:
    """
    Creates LabelBindings and keeps them stable per owning element.

    Owners are held by weak reference: when an element is garbage
    collected its binding goes with it, so a new element never inherits
    a dead one's ids. Owners must support weak references (QWidgets and
    Element nodes do).
    """

    def __init__(
        self,
        allocator: Optional[IdAllocator] = None,
        *,
        config: Optional["EngineConfig"] = None,
    ):
        if allocator is None:
            allocator = IdAllocator(config.id_suffix_length) if config else get_id_allocator()
        self._allocator = allocator
        # id(owner) -> (weak reference to owner, binding)
        self._owned: Dict[int, Tuple["weakref.ref[Any]", LabelBinding]] = {}

    def _lookup(self, owner: Any) -> Optional[LabelBinding]:
        entry = self._owned.get(id(owner))
        if entry is None or entry[0]() is not owner:
            return None
        return entry[1]

    def _store(self, owner: Any, binding: LabelBinding) -> None:
        key = id(owner)
        entry = self._owned.get(key)
        if entry is not None and entry[0]() is owner:
            self._owned[key] = (entry[0], binding)
            return

        owned = self._owned

        def evict(ref: "weakref.ref[Any]") -> None:
            current = owned.get(key)
            if current is not None and current[0] is ref:
                del owned[key]

        self._owned[key] = (weakref.ref(owner, evict), binding)

    def bind(
        self,
        label: Optional[str] = None,
        description: Optional[str] = None,
        error_message: Optional[str] = None,
        *,
        owner: Optional[Any] = None,
    ) -> LabelBinding:
        """
        Generate an id triple and compute the cross-references.

        Args:
            label: Visible label text, if any
            description: Help text, if any
            error_message: Current error text, if any
            owner: Element the binding belongs to. Binding the same owner
                again keeps its ids and only recomputes the references.
        """
        if owner is not None:
            existing = self._lookup(owner)
            if existing is not None:
                return self.rebind(existing, label, description, error_message, owner=owner)

        binding = LabelBinding(
            label_id=self._allocator.next_id(LABEL_ID_PREFIX),
            description_id=self._allocator.next_id(DESCRIPTION_ID_PREFIX),
            error_id=self._allocator.next_id(ERROR_ID_PREFIX),
        )
        binding = _cross_references(binding, label, description, error_message)

        if owner is not None:
            self._store(owner, binding)
        return binding

    def rebind(
        self,
        binding: LabelBinding,
        label: Optional[str] = None,
        description: Optional[str] = None,
        error_message: Optional[str] = None,
        *,
        owner: Optional[Any] = None,
    ) -> LabelBinding:
        """Recompute references for changed text, keeping the ids."""
        updated = _cross_references(binding, label, description, error_message)
        if owner is not None:
            self._store(owner, updated)
        return updated

    def binding_for(self, owner: Any) -> Optional[LabelBinding]:
        return self._lookup(owner)

    def release(self, owner: Any) -> None:
        """Forget an owner's ids when its element goes away."""
        if self._lookup(owner) is not None:
            del self._owned[id(owner)]
            logger.debug(f"Released label binding for {owner!r}")

    def __len__(self) -> int:
        return sum(1 for ref, _ in self._owned.values() if ref() is not None)
