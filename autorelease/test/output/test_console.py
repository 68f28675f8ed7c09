"""Tests for autorelease.output.console module."""

from __future__ import annotations

import pytest

from autorelease.output.console import (
    ActionsConsole,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
    group,
    make_console,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.HEADER) == "header"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_error(self) -> None:
        console = MockConsole()
        console.error("something failed")
        assert console.messages == ["error: something failed"]
        assert console.has_error()

    def test_warning(self) -> None:
        console = MockConsole()
        console.warning("be careful")
        assert console.messages == ["warning: be careful"]
        assert console.has_warning()

    def test_groups(self) -> None:
        console = MockConsole()
        console.start_group("Generating release tag")
        console.print("inside")
        console.end_group()
        assert console.groups == ["Generating release tag"]
        assert console.text == "group: Generating release tag\ninside\nendgroup"

    def test_find(self) -> None:
        console = MockConsole()
        console.info("Deleting release: 99")
        assert len(console.find("release: 99")) == 1
        assert console.find("missing") == []


class TestGroup:
    def test_wraps_block(self) -> None:
        console = MockConsole()
        with group(console, "Section"):
            console.print("body")
        assert console.messages == ["group: Section", "body", "endgroup"]

    def test_closes_on_exception(self) -> None:
        console = MockConsole()
        with pytest.raises(RuntimeError):
            with group(console, "Section"):
                raise RuntimeError("boom")
        assert console.messages[-1] == "endgroup"


class TestActionsConsole:
    def test_workflow_commands(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = ActionsConsole()
        console.start_group("Generating release tag")
        console.print('Attempting to create or update release tag "latest"')
        console.warning("lookup failed")
        console.error("first line\nsecond line")
        console.end_group()

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "::group::Generating release tag",
            'Attempting to create or update release tag "latest"',
            "::warning::lookup failed",
            "::error::first line%0Asecond line",
            "::endgroup::",
        ]

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        ActionsConsole().print("[bold]not styled[/bold]")
        assert capsys.readouterr().out.strip() == "[bold]not styled[/bold]"


class TestRichConsole:
    def test_error_escapes_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("tag [latest] failed")
        assert "tag [latest] failed" in capsys.readouterr().out


class TestMakeConsole:
    def test_actions(self) -> None:
        assert isinstance(make_console(in_actions=True), ActionsConsole)

    def test_terminal(self) -> None:
        assert isinstance(make_console(in_actions=False), RichConsole)

    def test_protocol_conformance(self) -> None:
        consoles: list[ConsoleProtocol] = [MockConsole(), ActionsConsole(), RichConsole()]
        assert len(consoles) == 3
