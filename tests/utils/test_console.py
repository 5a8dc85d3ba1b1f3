import pytest
from rich.console import Console

import profkit.utils.console as console_utils


@pytest.mark.parametrize("helper, marker", [
    (console_utils.success, "✔ converted"),
    (console_utils.warning, "⚠  converted"),
    (console_utils.info, "converted"),
])
def test_status_lines_go_to_stdout(helper, marker):
    with console_utils.console.capture() as capture:
        helper("converted")
    assert capture.get().strip() == marker


def test_error_goes_to_stderr():
    with console_utils.console.capture() as out, console_utils.err_console.capture() as err:
        console_utils.error("no profiles")
    assert out.get() == ""
    assert err.get().strip() == "✖ no profiles"


def test_create_table_with_rows():
    table = console_utils.create_table("Profiles", ["Key", "Type"], [("base", "base"), ("zosmf_a", "zosmf")])

    assert table.title == "Profiles"
    assert [c.header for c in table.columns] == ["Key", "Type"]
    assert table.row_count == 2


def test_create_table_without_rows():
    assert console_utils.create_table("Empty", ["a"]).row_count == 0


def test_display_panel_renders_content():
    with console_utils.console.capture() as capture:
        console_utils.display_panel('{"autoStore": true}', "Config")
    output = capture.get()
    assert "Config" in output
    assert '"autoStore": true' in output


def test_console_response_keeps_markup_literal():
    target = Console(record=True, width=80)
    response = console_utils.ConsoleResponse(target)

    response.log("[bold]token[/bold]")
    response.log("Logout successful.")

    assert response.messages == ["[bold]token[/bold]", "Logout successful."]
    assert "[bold]token[/bold]" in target.export_text()
