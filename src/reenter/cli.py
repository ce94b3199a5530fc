"""CLI entry point for reenter."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from reenter.ai import create_client
from reenter.briefing import run_interview
from reenter.config import Settings, load_settings
from reenter.log import LOG_LEVELS, setup_logging
from reenter.options import MODES, get_mode
from reenter.scout import analyze_project, generate_steps, read_key_files, scan_directory
from reenter.session import create_session, log_history
from reenter.tui import (
    Choice,
    ProcessTerminal,
    ProgressOverlay,
    PromptDefaults,
    PromptKeybindingsManager,
    Terminal,
    format_text_block,
    select_prompt,
    set_prompt_defaults,
    set_prompt_keybindings,
    with_spinner,
)
from reenter.tui.ansi import gray, red
from reenter.walkthrough import save_starting_point, walk_steps

logger = logging.getLogger(__name__)

EMPTY_FOLDER_MESSAGE = "This folder looks empty. Point reenter at a project folder."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reenter",
        description="Pick an old project back up, one step at a time",
    )
    parser.add_argument("path", nargs="?", help="Project folder (default: current directory)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level for the log file")
    parser.add_argument("--page-size", type=int, help="Choices shown at once in a list")
    return parser.parse_args(argv)


def _error_line(error: Exception) -> str:
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


def _apply_prompt_settings(settings: Settings) -> None:
    set_prompt_defaults(
        PromptDefaults(page_size=settings.page_size, tick_interval=settings.tick_interval)
    )
    set_prompt_keybindings(PromptKeybindingsManager(settings.keybindings))


async def run(project_path: str, settings: Settings, *, terminal: Terminal | None = None) -> int:
    """Scout, choose a mode, save a starting point, brief, then walk the steps.

    Returns the process exit code.
    """
    terminal = terminal or ProcessTerminal()
    client = create_client(settings.api_key)
    session = create_session(project_path, "run")

    overlay = ProgressOverlay("Reentering", terminal=terminal)
    with overlay:
        lines = await asyncio.to_thread(scan_directory, project_path)
        if not lines:
            overlay.dismiss()
            terminal.write(format_text_block(EMPTY_FOLDER_MESSAGE, terminal.columns))
            return 1

        structure = "\n".join(lines)
        key_files = await asyncio.to_thread(read_key_files, project_path)
        session.project.structure = structure
        session.project.key_files = key_files

        analysis = await analyze_project(client, structure, key_files, model=settings.summary_model)
        overlay.complete("Reentering")

    session.project.summary = analysis.summary
    log_history(session, "ai", analysis.summary)
    terminal.write(format_text_block(analysis.summary, terminal.columns))

    selected = await select_prompt(
        "What do you want to do with it:",
        [Choice(title=m.title, value=m.value, description=m.description) for m in MODES],
        terminal=terminal,
    )
    mode = get_mode(selected)
    session.plan.chosen_mode = mode
    log_history(session, "user", f"Chose: {mode.title}")

    # Only Run is built so far.
    if mode.value != "run":
        terminal.write(format_text_block(f"{mode.title} is coming soon.", terminal.columns))
        return 0

    session.meta.mode = "run"

    terminal.write("\n")
    outcome = await save_starting_point(project_path, terminal=terminal)
    log_history(session, "system", outcome)

    session.plan.steps = await with_spinner(
        "Mapping out the steps",
        "Steps ready",
        lambda: generate_steps(client, mode.value, structure, key_files, model=settings.summary_model),
        terminal=terminal,
    )

    ready = await run_interview(client, session, model=settings.briefing_model, terminal=terminal)
    if not ready:
        terminal.write(format_text_block(gray("No rush. Run reenter again when you're ready."), terminal.columns))
        return 0

    await walk_steps(session, terminal=terminal)
    logger.info(
        "Session done: %d of %d steps completed",
        len(session.plan.completed_steps),
        len(session.plan.steps),
    )
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    settings = load_settings(overrides={"log_level": args.log_level, "page_size": args.page_size})
    setup_logging(settings.log_level, settings.log_file)
    _apply_prompt_settings(settings)

    project_path = os.path.abspath(args.path) if args.path else os.getcwd()
    if not os.path.isdir(project_path):
        print(red(f"Error: not a folder: {project_path}"), file=sys.stderr)
        sys.exit(1)

    logger.info("Starting reenter in %s", project_path)
    try:
        code = asyncio.run(run(project_path, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("reenter failed")
        print(red(f"Error: {_error_line(e)}"), file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
