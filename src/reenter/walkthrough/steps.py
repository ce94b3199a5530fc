"""Walks the plan one step at a time."""

from __future__ import annotations

import logging

from reenter.session import Session, log_history
from reenter.tui import Choice, ProcessTerminal, Terminal, format_text_block, select_prompt

logger = logging.getLogger(__name__)


async def walk_steps(session: Session, *, terminal: Terminal | None = None) -> bool:
    """Show each remaining step and wait for the user to finish it.

    Resumes from ``plan.current_step``. Returns ``True`` once every step is
    done, ``False`` if the user stops early.
    """
    terminal = terminal or ProcessTerminal()
    steps = session.plan.steps
    total = len(steps)

    for index in range(session.plan.current_step, total):
        session.plan.current_step = index
        step = steps[index]
        terminal.write(format_text_block(f"Step {index + 1} of {total}: {step}", terminal.columns))
        log_history(session, "system", f"Step {index + 1}: {step}")

        done_title = "Done" if index == total - 1 else "Done, next step"
        choice = await select_prompt(
            "How's it going?",
            [Choice(title=done_title, value="done"), Choice(title="Stop here", value="stop")],
            terminal=terminal,
        )
        if choice == "stop":
            log_history(session, "user", f"Stopped at step {index + 1}")
            logger.info("Walkthrough stopped at step %d of %d", index + 1, total)
            return False

        session.plan.completed_steps.append(index)
        log_history(session, "user", f"Finished step {index + 1}")

    session.plan.current_step = total
    terminal.write(format_text_block("That's every step.", terminal.columns))
    return True
