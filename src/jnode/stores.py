"""Document and selection stores the edit session works against."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Protocol

from jnode._jsonpath import Path
from jnode.node import NodeSnapshot, build_nodes

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class DocumentStore(Protocol):
    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


class SelectionStore(Protocol):
    @property
    def selected_node(self) -> NodeSnapshot | None: ...

    def update_node(self, node: NodeSnapshot) -> None: ...

    def subscribe(self, listener: Listener) -> None: ...


class _Observable:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class JsonStore(_Observable):
    """Holds the serialized document text."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._notify()


class GraphStore(_Observable):
    """Graph nodes of a document plus the currently selected one."""

    def __init__(self, root: object = None) -> None:
        super().__init__()
        self.nodes: list[NodeSnapshot] = []
        self._selected: NodeSnapshot | None = None
        if root is not None:
            self.load(root)

    @property
    def selected_node(self) -> NodeSnapshot | None:
        return self._selected

    def load(self, root: object) -> None:
        """Rebuild nodes from *root*, keeping the selection by path."""
        self.nodes = build_nodes(root)
        if self._selected is not None:
            self._set_selected(self.find(self._selected.path))

    def load_text(self, text: str) -> bool:
        """Rebuild from document text. Returns False if it does not parse."""
        try:
            root = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            logger.warning("graph not rebuilt, document is not valid JSON: %s", exc)
            return False
        self.load(root)
        return True

    def find(self, path: Path) -> NodeSnapshot | None:
        path = tuple(path)
        for node in self.nodes:
            if node.path == path:
                return node
        return None

    def select(self, path: Path) -> NodeSnapshot | None:
        node = self.find(path)
        self._set_selected(node)
        return node

    def clear_selection(self) -> None:
        self._set_selected(None)

    def update_node(self, node: NodeSnapshot) -> None:
        """Replace the stored node with the same path and select it."""
        for i, existing in enumerate(self.nodes):
            if existing.path == node.path:
                self.nodes[i] = node
                break
        else:
            self.nodes.append(node)
        self._set_selected(node)

    def _set_selected(self, node: NodeSnapshot | None) -> None:
        if node is self._selected:
            return
        self._selected = node
        self._notify()
