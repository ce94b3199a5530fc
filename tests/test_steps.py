"""Tests for walking the plan step by step."""

from __future__ import annotations

import pytest

from reenter.session import Session, create_session
from reenter.walkthrough import walk_steps

from .virtual_terminal import KEY_CTRL_C, KEY_DOWN, KEY_ENTER, VirtualTerminal


def session_with_steps(*steps: str) -> Session:
    session = create_session("/projects/todo", "run")
    session.plan.steps = list(steps)
    return session


class TestWalkSteps:
    @pytest.mark.asyncio
    async def test_every_step_done(self) -> None:
        session = session_with_steps("Install what it needs", "Start the server")
        vt = VirtualTerminal(keys=[KEY_ENTER, KEY_ENTER])

        finished = await walk_steps(session, terminal=vt)

        assert finished
        assert session.plan.completed_steps == [0, 1]
        assert session.plan.current_step == 2
        screen = vt.screen()
        assert "  Step 1 of 2: Install what it needs" in screen
        assert "● How's it going?  Done, next step" in screen
        assert "  Step 2 of 2: Start the server" in screen
        assert "● How's it going?  Done" in screen
        assert screen[-1] == "  That's every step."

    @pytest.mark.asyncio
    async def test_stop_early(self) -> None:
        session = session_with_steps("Install what it needs", "Start the server")
        vt = VirtualTerminal(keys=[KEY_DOWN, KEY_ENTER])

        finished = await walk_steps(session, terminal=vt)

        assert not finished
        assert session.plan.completed_steps == []
        assert session.plan.current_step == 0
        assert session.history[-1].content == "Stopped at step 1"
        assert "Step 2 of 2" not in vt.output
        assert vt.pending_keys == []

    @pytest.mark.asyncio
    async def test_resumes_from_current_step(self) -> None:
        session = session_with_steps("Install what it needs", "Start the server")
        session.plan.current_step = 1
        session.plan.completed_steps = [0]
        vt = VirtualTerminal(keys=[KEY_ENTER])

        finished = await walk_steps(session, terminal=vt)

        assert finished
        assert session.plan.completed_steps == [0, 1]
        assert "Step 1 of 2" not in vt.output

    @pytest.mark.asyncio
    async def test_history_records_each_step(self) -> None:
        session = session_with_steps("Only step")
        vt = VirtualTerminal(keys=[KEY_ENTER])

        await walk_steps(session, terminal=vt)

        assert [(e.type, e.content) for e in session.history] == [
            ("system", "Step 1: Only step"),
            ("user", "Finished step 1"),
        ]

    @pytest.mark.asyncio
    async def test_ctrl_c_propagates(self) -> None:
        session = session_with_steps("Only step")
        vt = VirtualTerminal(keys=[KEY_CTRL_C])

        with pytest.raises(KeyboardInterrupt):
            await walk_steps(session, terminal=vt)

        assert not vt.in_raw_mode
        assert vt.cursor_visible
        assert session.plan.completed_steps == []
