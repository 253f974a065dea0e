"""Dialog showing one graph node, with an inline field editor."""

from __future__ import annotations

from rich.syntax import Syntax
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from jnode.session import EditSession, SessionMode


class NodeModal(ModalScreen[None]):
    """Shows the node content and JSON path; Edit switches to a form."""

    DEFAULT_CSS = """
    NodeModal {
        align: center middle;
    }
    #node-dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: solid $accent;
        background: $surface;
        padding: 0 1;
    }
    #node-header, #node-actions {
        height: auto;
    }
    #node-title {
        width: 1fr;
    }
    #node-content, #node-path {
        max-height: 16;
    }
    #node-form {
        height: auto;
        max-height: 20;
    }
    #node-actions {
        align-horizontal: right;
    }
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, session: EditSession, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        with Vertical(id="node-dialog"):
            with Horizontal(id="node-header"):
                yield Static("[b]Content[/b]", id="node-title")
                yield Button("Edit", id="node-edit", variant="primary")
                yield Button("✕", id="node-close", variant="error")
            yield Static(id="node-content")
            yield VerticalScroll(id="node-form")
            with Horizontal(id="node-actions"):
                yield Button("Cancel", id="node-cancel")
                yield Button("Save", id="node-save", variant="primary")
            yield Static("[b]JSON Path[/b]")
            yield Static(id="node-path")

    def on_mount(self) -> None:
        self._refresh_view()

    def _refresh_view(self) -> None:
        editing = self.session.mode is SessionMode.EDITING
        content = self.query_one("#node-content", Static)
        content.update(Syntax(self.session.display_value, "json", word_wrap=True))
        content.display = not editing
        self.query_one("#node-form").display = editing
        self.query_one("#node-actions").display = editing
        self.query_one("#node-edit", Button).disabled = (
            editing or self.session.node is None
        )
        self.query_one("#node-path", Static).update(
            Syntax(self.session.path_text, "json", word_wrap=True)
        )

    async def _build_form(self) -> None:
        form_box = self.query_one("#node-form", VerticalScroll)
        await form_box.remove_children()
        form = self.session.form
        if not form:
            await form_box.mount(Static("No editable attributes"))
            return
        for key, text in form.items():
            await form_box.mount(Label(key or "Value"), Input(text, name=key))
        form_box.query(Input).first().focus()

    # -- Event handlers ----------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        key = event.input.name or ""
        # stale events from a discarded form are ignored
        if self.session.mode is SessionMode.EDITING and key in self.session.form:
            self.session.set_field(key, event.value)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button.id
        if button == "node-edit":
            if self.session.start_editing():
                await self._build_form()
        elif button == "node-cancel":
            self.session.cancel()
        elif button == "node-save":
            if self.session.save():
                self.notify("Node saved", severity="information")
            else:
                self.notify(
                    self.session.status_msg or "Nothing saved",
                    severity="error",
                    timeout=6,
                )
        elif button == "node-close":
            self.action_close()
            return
        self._refresh_view()

    def action_close(self) -> None:
        self.session.cancel()
        self.dismiss()
