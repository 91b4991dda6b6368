"""Tests for session spec models"""

import pytest

from termlaunch.adapters.tmux.layout import layout_checksum
from termlaunch.spec.models import PaneSpec, SessionSpec, WindowSpec, is_layout_hint


class TestPaneSpec:
    def test_blank_command_is_none(self):
        assert PaneSpec("   ").command is None
        assert PaneSpec("").command is None

    def test_size_bounds(self):
        assert PaneSpec(size=1).size == 1
        assert PaneSpec(size=99).size == 99
        with pytest.raises(ValueError, match="between 1 and 99"):
            PaneSpec(size=0)
        with pytest.raises(ValueError):
            PaneSpec(size=100)


class TestWindowSpec:
    def test_default_has_one_pane(self):
        assert WindowSpec().panes == (PaneSpec(),)

    def test_no_panes(self):
        with pytest.raises(ValueError, match="at least one pane"):
            WindowSpec(name="a", panes=())

    def test_blank_name(self):
        with pytest.raises(ValueError, match="blank"):
            WindowSpec(name=" ")

    def test_unknown_layout(self):
        with pytest.raises(ValueError, match="unknown layout"):
            WindowSpec(layout="diagonal")

    def test_custom_layout(self):
        body = "80x24,0,0,1"
        window = WindowSpec(layout=f"{layout_checksum(body)},{body}")

        assert window.has_custom_layout
        assert not WindowSpec(layout="tiled").has_custom_layout

    def test_label(self):
        assert WindowSpec(name="logs").label(3) == "logs"
        assert WindowSpec().label(3) == "window-3"

    def test_pane_root_precedence(self):
        window = WindowSpec(root="/w", panes=(PaneSpec(root="/p"), PaneSpec()))

        assert window.pane_root(window.panes[0], "/s") == "/p"
        assert window.pane_root(window.panes[1], "/s") == "/w"
        assert WindowSpec().pane_root(PaneSpec(), "/s") == "/s"
        assert WindowSpec().pane_root(PaneSpec(), None) is None


class TestSessionSpec:
    @pytest.mark.parametrize("name", ["", "  ", "a:b", "a.b"])
    def test_invalid_name(self, name):
        with pytest.raises(ValueError):
            SessionSpec(name=name)

    def test_no_windows(self):
        with pytest.raises(ValueError, match="at least one window"):
            SessionSpec(name="s", windows=())

    def test_immutable(self):
        spec = SessionSpec(name="s", windows=[WindowSpec()], pre=["make"], environment={"A": "1"})

        assert isinstance(spec.windows, tuple)
        assert spec.pre == ("make",)
        with pytest.raises(TypeError):
            spec.environment["B"] = "2"
        with pytest.raises(AttributeError):
            spec.name = "t"

    def test_pane_count(self):
        spec = SessionSpec(name="s", windows=(WindowSpec(panes=(PaneSpec(), PaneSpec())), WindowSpec()))

        assert spec.pane_count == 3

    def test_uses_start_directory(self):
        assert not SessionSpec(name="s").uses_start_directory()
        assert SessionSpec(name="s", root="/srv").uses_start_directory()
        assert SessionSpec(name="s", windows=(WindowSpec(panes=(PaneSpec(root="/x"),)),)).uses_start_directory()

    def test_uses_named_windows(self):
        assert not SessionSpec(name="s").uses_named_windows()
        assert SessionSpec(name="s", windows=(WindowSpec(name="a"),)).uses_named_windows()


def test_is_layout_hint():
    assert is_layout_hint("main-vertical-mirrored")
    assert not is_layout_hint("main")
