"""Tests for the Rich Console factory and theme."""

from io import StringIO

from calpack.output.console import CALPACK_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[cal.error]boom[/cal.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80

    def test_highlight_disabled(self) -> None:
        console = create_console()
        console.print("index=730485")
        assert "\x1b" not in get_output(console)


class TestTheme:
    def test_calpack_styles_present(self) -> None:
        for name in ("cal.ok", "cal.error", "cal.op", "cal.key", "cal.index", "cal.time", "cal.domain"):
            assert name in CALPACK_THEME.styles
