"""
Element-tree capability used by the focus controllers.

The engine never touches a concrete UI toolkit. It asks an ElementTree
whether a node can take focus and what its children are, and it asks a
FocusHost which node currently holds input focus. The presentation layer
supplies both (see a11y.qt_adapter for PyQt6 widgets).

An in-memory implementation (Element, ElementNodeTree, FocusPointer) is
provided for headless hosts and tests:

    dialog = Element("div")
    ok = dialog.append(Element("button", name="ok"))
    cancel = dialog.append(Element("button", name="cancel", disabled=True))

    tree = ElementNodeTree()
    collect_focusable(tree, dialog)   # [ok]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence

from a11y.events import FocusCommand

logger = logging.getLogger(__name__)

# Tags that take focus without an explicit tab index
NATIVELY_FOCUSABLE_TAGS = frozenset({"button", "input", "select", "textarea"})


class ElementTree(Protocol):
    """Queries the engine needs from the presentation layer's element tree."""

    def children(self, node: Any) -> Sequence[Any]:
        ...

    def is_focusable(self, node: Any) -> bool:
        ...

    def is_attached(self, node: Any) -> bool:
        ...


class FocusHost(Protocol):
    """The presentation layer's single "current input focus" pointer."""

    def focused(self) -> Optional[Any]:
        ...

    def execute(self, command: FocusCommand) -> bool:
        """Move focus as instructed. Returns False if the target was unusable."""
        ...


def collect_focusable(tree: ElementTree, container: Any) -> List[Any]:
    """
    Return focusable descendants of ``container`` in document order.

    The container itself is not included. An unattached or missing
    container yields an empty list.
    """
    if container is None or not tree.is_attached(container):
        return []

    found: List[Any] = []
    stack = list(reversed(tree.children(container)))
    while stack:
        node = stack.pop()
        if tree.is_focusable(node):
            found.append(node)
        stack.extend(reversed(tree.children(node)))
    return found


@dataclass(eq=False)
class Element:
    """
    In-memory element node.

    Equality is identity, matching how the controllers compare elements.
    """
    tag: str
    name: str = ""
    disabled: bool = False
    hidden: bool = False
    tab_index: Optional[int] = None
    href: Optional[str] = None
    children: List["Element"] = field(default_factory=list)
    parent: Optional["Element"] = field(default=None, repr=False)
    attached: bool = True

    def append(self, child: "Element") -> "Element":
        child.parent = self
        child.attached = self.attached
        self.children.append(child)
        return child

    def detach(self) -> None:
        """Remove this node (and its subtree) from the tree."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None
        for node in self.walk():
            node.attached = False

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        label = f"#{self.name}" if self.name else ""
        return f"<{self.tag}{label}>"


class ElementNodeTree:
    """ElementTree over Element nodes."""

    def children(self, node: Element) -> Sequence[Element]:
        return list(node.children)

    def is_attached(self, node: Element) -> bool:
        return node.attached

    def is_focusable(self, node: Element) -> bool:
        """
        Interactive, enabled and visible, and either natively focusable
        (form controls, links with href) or given a non-negative tab index.
        """
        if node.disabled or node.hidden or not node.attached:
            return False
        if node.tab_index is not None:
            return node.tab_index >= 0
        if node.tag in NATIVELY_FOCUSABLE_TAGS:
            return True
        return node.tag == "a" and node.href is not None


class FocusPointer:
    """In-memory FocusHost tracking which Element has input focus."""

    def __init__(self, tree: Optional[ElementNodeTree] = None, initial: Optional[Element] = None):
        self._tree = tree or ElementNodeTree()
        self._focused: Optional[Element] = initial
        self.history: List[Element] = []

    def focused(self) -> Optional[Element]:
        if self._focused is not None and not self._tree.is_attached(self._focused):
            return None
        return self._focused

    def focus(self, element: Optional[Element]) -> bool:
        if element is None or not self._tree.is_attached(element):
            logger.debug(f"Ignoring focus request for unattached element {element!r}")
            return False
        self._focused = element
        self.history.append(element)
        return True

    def execute(self, command: FocusCommand) -> bool:
        return self.focus(command.target)
