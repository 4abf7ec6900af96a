"""Tests for the inspector widgets and screen composition."""

from restpane.cli.core.ansi_text import fit, strip_ansi, truncate, visible_len
from restpane.cli.inspector import InspectorApp
from restpane.cli.widgets import PaneWidget, Rect, StatusBarWidget, describe_state
from restpane.core.geometry import Chrome
from restpane.core.regions import Emphasis, Orientation, PaneGroup, RegionID
from restpane.layout.engine import LayoutEngine, SizedWidget
from restpane.layout.state import LayoutState


class TestAnsiText:
    """Tests for width handling of escaped strings."""

    def test_visible_len_ignores_codes(self) -> None:
        assert visible_len("\x1b[1;96mabc\x1b[0m") == 3

    def test_truncate_keeps_codes_and_resets(self) -> None:
        assert truncate("\x1b[1mabcdef", 3) == "\x1b[1mabc\x1b[0m"

    def test_truncate_without_cut(self) -> None:
        assert truncate("abc", 5) == "abc"

    def test_fit_pads(self) -> None:
        assert fit("ab", 4) == "ab  "
        assert visible_len(fit("\x1b[1mabcdef", 4)) == 4


class TestPaneWidget:
    """Tests for the bordered placeholder pane."""

    def test_border_and_size_line(self) -> None:
        pane = PaneWidget(RegionID.EDITOR)
        pane.set_size(16, 3)
        lines = [strip_ansi(line) for line in pane.render(Rect(20, 5))]
        assert lines[0] == "┌ editor " + "─" * 10 + "┐"
        assert lines[1] == "│16x3              │"
        assert lines[-1] == "└" + "─" * 18 + "┘"
        assert len(lines) == 5

    def test_tiny_bounds(self) -> None:
        pane = PaneWidget(RegionID.EDITOR)
        assert [strip_ansi(line) for line in pane.render(Rect(1, 3))] == ["e", "e", "e"]
        assert pane.render(Rect(0, 3)) == []

    def test_resize_count(self) -> None:
        pane = PaneWidget(RegionID.EDITOR)
        pane.set_size(10, 10)
        pane.set_size(12, 10)
        assert pane.resize_count == 2
        assert (pane.width, pane.height) == (12, 10)

    def test_accepted_by_engine(self) -> None:
        pane = PaneWidget(RegionID.RESPONSE)
        assert isinstance(pane, SizedWidget)
        engine = LayoutEngine()
        engine.resize(120, 60)
        engine.bind(RegionID.RESPONSE, pane)
        assert (pane.width, pane.height) == (36, 55)


class TestStatusBar:
    """Tests for the status line."""

    def test_describe_state(self) -> None:
        text = describe_state(LayoutState())
        assert text == "focus:editor  main:vertical  sidebar:0.20  editor:0.60"

    def test_describe_compare_and_zoom(self) -> None:
        state = LayoutState(
            main_orientation=Orientation.STACKED,
            response_split=True,
            response_orientation=Orientation.STACKED,
            zoom=PaneGroup.RESPONSE,
        )
        text = describe_state(state)
        assert "main:horizontal" in text
        assert "compare:horizontal" in text
        assert text.endswith("zoom:response")

    def test_render_fills_width(self) -> None:
        bar = StatusBarWidget()
        bar.set_state(LayoutState())
        bar.set_message("Zoom cleared")
        [line] = bar.render(Rect(100, 1))
        assert visible_len(line) == 100
        assert "Zoom cleared" in strip_ansi(line)

    def test_render_truncates(self) -> None:
        bar = StatusBarWidget()
        bar.set_state(LayoutState())
        [line] = bar.render(Rect(20, 1))
        assert visible_len(line) == 20
        assert strip_ansi(line).endswith("…")


class TestInspector:
    """Tests for the composed inspector screen."""

    def make_app(self, width: int = 120, height: int = 60) -> InspectorApp:
        engine = LayoutEngine()
        engine.resize(width, height)
        return InspectorApp(engine)

    def test_panes_receive_content_sizes(self) -> None:
        app = self.make_app()
        editor = app.panes[RegionID.EDITOR]
        assert (editor.width, editor.height) == (52, 55)
        assert RegionID.HISTORY not in app.panes

    def test_one_line_per_row(self) -> None:
        app = self.make_app()
        lines = app.compose()
        assert len(lines) == 60
        for line in lines[1:58]:
            assert visible_len(line) == 120

    def test_focus_emphasis(self) -> None:
        app = self.make_app()
        app.compose()
        assert app.panes[RegionID.EDITOR].emphasis is Emphasis.FOCUSED
        assert app.panes[RegionID.FILES].emphasis is Emphasis.INACTIVE

    def test_pending_chord_in_command_bar(self) -> None:
        app = self.make_app()
        app.dispatcher.handle_key("g")
        lines = app.compose()
        assert strip_ansi(lines[58]).strip() == "g"

    def test_compare_view_lines(self) -> None:
        app = self.make_app()
        app.dispatcher.handle_key("ctrl+v")
        lines = app.compose()
        assert len(lines) == 60
        assert strip_ansi(lines[1]).count("┌ response") == 2

    def test_stacked_and_collapsed(self) -> None:
        app = self.make_app()
        app.engine.set_main_orientation(Orientation.STACKED)
        app.engine.toggle_group_collapse(PaneGroup.SIDEBAR)
        lines = app.compose()
        assert len(lines) == 60
        assert strip_ansi(lines[1]).startswith("┌ editor")

    def test_without_chrome(self) -> None:
        app = self.make_app(80, 24)
        app.engine.set_chrome(Chrome(header=0, command_bar=0, status_bar=0))
        lines = app.compose()
        assert len(lines) == 24
        assert strip_ansi(lines[0]).startswith("┌ files")

    def test_not_ready(self) -> None:
        assert InspectorApp(LayoutEngine()).compose() == []
