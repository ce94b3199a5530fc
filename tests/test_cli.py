"""Tests for the command line entry point and the top-level flow."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from collections.abc import Iterator
from pathlib import Path

import pydantic
import pytest

from reenter import cli
from reenter.config import Settings
from reenter.tui import (
    get_prompt_defaults,
    get_prompt_keybindings,
    set_prompt_defaults,
    set_prompt_keybindings,
)
from reenter.tui.ansi import red
from reenter.types import Analysis
from reenter.walkthrough.git import COMMIT_BASE

from .fake_anthropic import FakeAnthropic
from .test_interview import BRIEFING, SYNTHESIS
from .virtual_terminal import KEY_CTRL_C, KEY_DOWN, KEY_ENTER, VirtualTerminal


def validation_error() -> pydantic.ValidationError:
    try:
        Analysis.model_validate({})
    except pydantic.ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> FakeAnthropic:
    fake = FakeAnthropic()
    monkeypatch.setattr(cli, "create_client", lambda api_key=None: fake)
    return fake


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(log_file=str(tmp_path / "reenter.log"))


@pytest.fixture
def project(tmp_path: Path) -> Path:
    path = tmp_path / "todo"
    path.mkdir()
    (path / "README.md").write_text("# Todo\nA tiny todo app.\n")
    (path / "app.py").write_text("print('hi')\n")
    return path


class TestParseArgs:
    def test_defaults(self) -> None:
        args = cli.parse_args([])
        assert args.path is None
        assert args.log_level is None
        assert args.page_size is None

    def test_all_options(self) -> None:
        args = cli.parse_args(["~/code/todo", "--log-level", "debug", "--page-size", "4"])
        assert args.path == "~/code/todo"
        assert args.log_level == "debug"
        assert args.page_size == 4

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(SystemExit):
            cli.parse_args(["--log-level", "loud"])


class TestRun:
    @pytest.mark.asyncio
    async def test_empty_folder(self, tmp_path: Path, client: FakeAnthropic, settings: Settings) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        vt = VirtualTerminal()

        code = await cli.run(str(empty), settings, terminal=vt)

        assert code == 1
        assert vt.screen() == ["", f"  {cli.EMPTY_FOLDER_MESSAGE}"]
        assert client.messages.create_calls == []
        assert vt.cursor_visible

    @pytest.mark.asyncio
    async def test_other_modes_are_coming_soon(
        self, project: Path, client: FakeAnthropic, settings: Settings
    ) -> None:
        client.queue_create(' a small todo app."}')
        vt = VirtualTerminal(keys=[KEY_ENTER])

        code = await cli.run(str(project), settings, terminal=vt)

        assert code == 0
        assert vt.screen() == [
            "● Reentering",
            "",
            "  This looks like a small todo app.",
            "",
            "● What do you want to do with it:  Browse",
            "",
            "  Browse is coming soon.",
        ]
        assert not (project / ".git").exists()

    @pytest.mark.asyncio
    async def test_ctrl_c_at_the_menu(
        self, project: Path, client: FakeAnthropic, settings: Settings
    ) -> None:
        client.queue_create(' a small todo app."}')
        vt = VirtualTerminal(keys=[KEY_CTRL_C])

        with pytest.raises(KeyboardInterrupt):
            await cli.run(str(project), settings, terminal=vt)

        assert vt.cursor_visible
        assert not vt.in_raw_mode


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRunMode:
    @pytest.fixture(autouse=True)
    def isolated_git(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
        monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
        for role in ("AUTHOR", "COMMITTER"):
            monkeypatch.setenv(f"GIT_{role}_NAME", "Test")
            monkeypatch.setenv(f"GIT_{role}_EMAIL", "test@example.com")

    @pytest.fixture
    def queued(self, client: FakeAnthropic) -> FakeAnthropic:
        client.queue_create(' a small todo app."}')
        client.queue_create('"steps": ["Install what it needs", "Start the server"]}')
        client.queue_stream(json.dumps(BRIEFING))
        client.queue_stream(json.dumps(SYNTHESIS))
        return client

    @pytest.mark.asyncio
    async def test_full_session(self, project: Path, queued: FakeAnthropic, settings: Settings) -> None:
        vt = VirtualTerminal(
            keys=[KEY_DOWN, KEY_ENTER, KEY_ENTER, KEY_ENTER, KEY_ENTER, KEY_ENTER]
        )

        code = await cli.run(str(project), settings, terminal=vt)

        assert code == 0
        screen = vt.screen()
        assert "● What do you want to do with it:  Run" in screen
        assert "● Starting point saved" in screen
        assert "● Steps ready" in screen
        assert "● Ready to start?  Yes, let's go" in screen
        assert screen[-1] == "  That's every step."
        assert vt.pending_keys == []

        log = subprocess.run(
            ["git", "log", "--format=%s"], cwd=project, capture_output=True, text=True, check=True
        ).stdout
        assert log.splitlines() == [f"{COMMIT_BASE} [00]"]

        assert queued.messages.create_calls[1]["model"] == settings.summary_model
        assert queued.messages.stream_calls[0]["model"] == settings.briefing_model

    @pytest.mark.asyncio
    async def test_not_ready_yet(self, project: Path, queued: FakeAnthropic, settings: Settings) -> None:
        vt = VirtualTerminal(keys=[KEY_DOWN, KEY_ENTER, KEY_ENTER, KEY_DOWN, KEY_ENTER])

        code = await cli.run(str(project), settings, terminal=vt)

        assert code == 0
        assert vt.screen()[-1] == "  No rush. Run reenter again when you're ready."
        assert "Step 1 of 2" not in vt.output


class TestMain:
    @pytest.fixture(autouse=True)
    def isolated_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.chdir(tmp_path)
        logger = logging.getLogger("reenter")
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        defaults, keybindings = get_prompt_defaults(), get_prompt_keybindings()
        yield
        set_prompt_defaults(defaults)
        set_prompt_keybindings(keybindings)
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_missing_folder(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "not a folder" in capsys.readouterr().err

    def test_exit_code_from_run(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            assert path == str(project)
            return 1

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project)])
        assert exc_info.value.code == 1

    def test_interrupt_exits_130(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project)])
        assert exc_info.value.code == 130

    def test_runtime_error_is_reported(
        self, project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            raise RuntimeError("interactive prompts need a terminal")

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project)])
        assert exc_info.value.code == 1
        assert "Error: interactive prompts need a terminal" in capsys.readouterr().err

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (validation_error(), "Error: 1 validation error for Analysis"),
            (FileNotFoundError("git"), "Error: git"),
            (
                subprocess.CalledProcessError(128, ["git", "init"]),
                "Error: Command '['git', 'init']' returned non-zero exit status 128.",
            ),
            (ValueError("Expected text response from AI"), "Error: Expected text response from AI"),
        ],
        ids=["validation", "missing-git", "git-failed", "non-text-reply"],
    )
    def test_any_error_is_one_red_line(
        self,
        project: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        error: Exception,
        message: str,
    ) -> None:
        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            raise error

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert err == red(message) + "\n"

    def test_bad_log_level_in_env_falls_back(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("REENTER_LOG_LEVEL", "verbose")
        seen: list[str] = []

        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            seen.append(settings.log_level)
            return 0

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(project)])
        assert exc_info.value.code == 0
        assert seen == ["warning"]

    def test_page_size_flag_reaches_prompts(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[int] = []

        async def fake_run(path: str, settings: Settings, *, terminal=None) -> int:
            seen.append(get_prompt_defaults().page_size)
            return 0

        monkeypatch.setattr(cli, "run", fake_run)
        with pytest.raises(SystemExit):
            cli.main([str(project), "--page-size", "3"])
        assert seen == [3]
