"""Edit session for the selected graph node."""

from __future__ import annotations

import json
import logging
from enum import Enum, auto

from jnode._jsonpath import (
    PathConflictError,
    format_path,
    get_value_at_path,
    set_value_at_path,
)
from jnode.config import EditorConfig
from jnode.node import (
    NodeSnapshot,
    apply_form,
    build_form,
    to_display_value,
    to_replacement_value,
)
from jnode.stores import DocumentStore, SelectionStore

logger = logging.getLogger(__name__)


class SessionMode(Enum):
    VIEWING = auto()
    EDITING = auto()


class EditSession:
    """Viewing/Editing state machine for one selected node.

    Saving projects the form into a replacement value, installs it at the
    node's path in a fresh copy of the document and writes the document back.
    Any change of the selected node drops the form and returns to viewing.
    """

    def __init__(
        self,
        selection: SelectionStore,
        document: DocumentStore,
        config: EditorConfig | None = None,
    ) -> None:
        self.selection = selection
        self.document = document
        self.config = config or EditorConfig()
        self.status_msg: str = ""
        self._mode: SessionMode = SessionMode.VIEWING
        self._form: dict[str, str] = {}
        self._node: NodeSnapshot | None = selection.selected_node
        selection.subscribe(self._sync_selection)

    # -- State -------------------------------------------------------------

    @property
    def mode(self) -> SessionMode:
        self._sync_selection()
        return self._mode

    @property
    def node(self) -> NodeSnapshot | None:
        self._sync_selection()
        return self._node

    @property
    def form(self) -> dict[str, str]:
        self._sync_selection()
        return dict(self._form)

    @property
    def display_value(self) -> str:
        node = self.node
        return to_display_value(node.rows if node else ())

    @property
    def path_text(self) -> str:
        node = self.node
        return format_path(node.path if node else ())

    def _sync_selection(self) -> None:
        current = self.selection.selected_node
        if current is self._node:
            return
        self._node = current
        self._reset()

    def _reset(self) -> None:
        self._form = {}
        self._mode = SessionMode.VIEWING

    # -- Transitions -------------------------------------------------------

    def start_editing(self) -> bool:
        self._sync_selection()
        if self._node is None or self._mode is SessionMode.EDITING:
            return False
        self._form = build_form(self._node)
        self._mode = SessionMode.EDITING
        self.status_msg = ""
        return True

    def set_field(self, key: str, text: str) -> None:
        self._sync_selection()
        if self._mode is not SessionMode.EDITING:
            raise RuntimeError("not editing")
        if key not in self._form:
            raise KeyError(key)
        self._form[key] = text

    def cancel(self) -> None:
        self._sync_selection()
        self._reset()

    def save(self) -> bool:
        """Write the form back into the document.

        Returns True when the document was updated. The session is back in
        viewing mode afterwards whatever the outcome.
        """
        self._sync_selection()
        if self._mode is not SessionMode.EDITING or self._node is None:
            return False

        node, form = self._node, dict(self._form)
        saved = False
        try:
            replacement = to_replacement_value(node, form)
            self.selection.update_node(apply_form(node, form))
            saved = self._persist(node, replacement)
            return saved
        finally:
            if not saved:
                # abandoned save: the graph goes back to the document's values
                self.selection.update_node(node)
            self._node = self.selection.selected_node
            self._reset()

    def _persist(self, node: NodeSnapshot, replacement: object) -> bool:
        raw = self.document.get_text()
        try:
            root = json.loads(raw) if raw and raw.strip() else {}
        except json.JSONDecodeError as exc:
            logger.error("failed to persist %s: %s", format_path(node.path), exc)
            self.status_msg = f"Invalid JSON: {exc}"
            return False

        if self.config.keep_nested and isinstance(replacement, dict):
            replacement = _with_nested(node, replacement, root)

        try:
            new_root = set_value_at_path(
                root, node.path, replacement, strict=self.config.strict
            )
        except PathConflictError as exc:
            logger.error("failed to persist %s: %s", format_path(node.path), exc)
            self.status_msg = f"Path conflict: {exc}"
            return False

        self.document.set_text(
            json.dumps(new_root, indent=self.config.indent, ensure_ascii=False)
        )
        logger.info("saved %s", format_path(node.path))
        self.status_msg = "saved"
        return True


def _with_nested(node: NodeSnapshot, flat: dict, root: object) -> dict:
    """Fill *flat* with the keys of the current value that the form does not set.

    Keys keep their document order; keys only in *flat* come last.
    """
    current = get_value_at_path(root, node.path)
    if not isinstance(current, dict):
        return flat

    merged = {key: flat.get(key, value) for key, value in current.items()}
    for key, value in flat.items():
        merged.setdefault(key, value)
    return merged
