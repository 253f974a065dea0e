"""Browse the nodes of a JSON document and edit them one at a time."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Tree

from jnode._jsonpath import PathSegment, format_path, parse_path
from jnode.config import EditorConfig, setup_logging
from jnode.modal import NodeModal
from jnode.node import NodeSnapshot, to_display_value
from jnode.session import EditSession
from jnode.stores import GraphStore, JsonStore

logger = logging.getLogger(__name__)

SAMPLE_JSON = """\
{
  "name": "jnode",
  "version": "1.0.0",
  "config": {
    "theme": "dark",
    "indent_size": 2,
    "auto_format": true
  },
  "tags": ["graph", "json"],
  "owner": null
}"""


def node_label(node: NodeSnapshot, width: int = 48) -> str:
    """One-line tree label: the path and a squeezed preview of the content."""
    preview = " ".join(to_display_value(node.rows).split())
    if len(preview) > width:
        preview = preview[: width - 1] + "…"
    return f"{format_path(node.path)}  {preview}"


class NodeEditApp(App):
    """Node list on the left; selecting one opens the node dialog."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #nodes {
        height: 1fr;
        border: solid $accent;
    }
    """

    TITLE = "JSON Node Editor"
    BINDINGS = [
        ("ctrl+s", "write_file", "Write"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        file_path: str = "",
        initial_content: str = "",
        config: EditorConfig | None = None,
        start_path: tuple[PathSegment, ...] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.file_path = file_path
        self.config = config or EditorConfig()
        self.start_path = start_path
        self._written_text = initial_content
        self.document = JsonStore(initial_content)
        self.graph = GraphStore()
        self._load_error = not self.graph.load_text(initial_content)
        self.session = EditSession(self.graph, self.document, self.config)
        self.document.subscribe(self._on_document_changed)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Tree("$", id="nodes")
        yield Footer()

    def on_mount(self) -> None:
        self._populate_tree()
        self._update_title()
        self.query_one("#nodes").focus()
        if self._load_error:
            self.notify("Invalid JSON: document has no nodes", severity="error", timeout=6)
        if self.start_path is not None:
            self._open_node(self.start_path)

    def _update_title(self) -> None:
        modified = " [+]" if self.document.get_text() != self._written_text else ""
        self.sub_title = (self.file_path or "[new]") + modified

    def _populate_tree(self) -> None:
        tree = self.query_one("#nodes", Tree)
        tree.clear()
        for node in self.graph.nodes:
            tree.root.add_leaf(node_label(node), data=node.path)
        tree.root.expand()

    def _open_node(self, path: tuple[PathSegment, ...]) -> None:
        if self.graph.select(path) is None:
            self.notify(f"No node at {format_path(path)}", severity="warning")
            return
        self.push_screen(NodeModal(self.session))

    # -- Event handlers ----------------------------------------------------

    def _on_document_changed(self) -> None:
        self.graph.load_text(self.document.get_text())
        self._populate_tree()
        self._update_title()

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        if event.node.data is not None:
            self._open_node(event.node.data)

    def action_write_file(self) -> None:
        if not self.file_path:
            self.notify("No file name given on the command line", severity="warning")
            return
        content = self.document.get_text()
        try:
            path = Path(self.file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("write to %s failed: %s", self.file_path, exc)
            self.notify(f"Save failed: {exc}", severity="error", timeout=6)
            return
        self._written_text = content
        self._update_title()
        self.notify(f"Saved: {self.file_path}", severity="information")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="jnode",
        description="Edit single nodes of a JSON document",
    )
    parser.add_argument("file", nargs="?", default="", help="JSON file to open")
    parser.add_argument(
        "-p", "--path",
        default=None,
        help='open the node at this path, e.g. $["config"]',
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="indentation of the written JSON"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="refuse to overwrite values that conflict with a node path",
    )
    parser.add_argument(
        "--flat-replace",
        action="store_true",
        help="drop nested children of an edited object instead of keeping them",
    )
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    parser.add_argument("--log-file", default="", help="write log records here")
    args = parser.parse_args()

    config = EditorConfig(
        indent=args.indent,
        strict=args.strict,
        keep_nested=not args.flat_replace,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    setup_logging(config.log_level, config.log_file)

    start_path = None
    if args.path is not None:
        try:
            start_path = parse_path(args.path)
        except ValueError as exc:
            print(f"jnode: bad path {args.path!r}: {exc}", file=sys.stderr)
            sys.exit(1)

    file_path: str = args.file
    initial_content = SAMPLE_JSON
    if file_path:
        path = Path(file_path)
        try:
            initial_content = path.read_text(encoding="utf-8") if path.exists() else "{}"
        except OSError as exc:
            print(f"jnode: {exc}", file=sys.stderr)
            sys.exit(1)

    app = NodeEditApp(
        file_path=file_path,
        initial_content=initial_content,
        config=config,
        start_path=start_path,
    )
    app.run()


if __name__ == "__main__":
    main()
