"""Builds the shared picture before step 1.

One question is enough: the files say what the project is, the user says
where it got to. Flow:

1. Presentation: what the files reveal beyond the summary.
2. The question: where did this get before you stopped?
3. Synthesis: one sentence tying their answer to step 1.
4. Confirm.
"""

from __future__ import annotations

import logging

import anthropic

from reenter.ai import JSON_SYSTEM_PROMPT, MessageStream, parse_json
from reenter.config import DEFAULT_BRIEFING_MODEL
from reenter.session import Session, log_history
from reenter.tui import (
    Choice,
    ProcessTerminal,
    Terminal,
    format_text_block,
    select_prompt,
    select_with_other,
    with_streaming_overlay,
)
from reenter.types import BriefingResponse, Question, SynthesisResponse

logger = logging.getLogger(__name__)

VOICE = (
    "You are talking to a self-taught developer who builds things to learn. They understand "
    "what their project does but may not know every technical term for how it works. Before "
    "finalizing any sentence, ask yourself: would this person have written these words "
    "themselves? If there's a technical term they wouldn't use naturally, find the plain "
    "english version. Speak like a senior dev who teaches well: warm, direct, specific."
)


async def generate_briefing(
    client: anthropic.AsyncAnthropic,
    session: Session,
    *,
    model: str = DEFAULT_BRIEFING_MODEL,
    terminal: Terminal | None = None,
) -> BriefingResponse:
    mode = session.plan.chosen_mode
    if mode is None:
        raise RuntimeError("No mode chosen before briefing")

    project = session.project
    prompt = f"""{VOICE}

You are helping a self-taught developer re-engage with an old project.

They already saw this summary, do not repeat it:
"{project.summary}"

Their chosen path: "{mode.title}" - {mode.description}

FILE STRUCTURE:
{project.structure}

KEY FILES:
{project.key_files or 'None found.'}

Write a short presentation that adds to what they already know: what the files reveal about the project's state and structure that the summary didn't cover. Start with "Looks like" or "It seems like", warm, not clinical. 1-2 sentences max.

Then write one question: where did this project get before they stopped? Was it working? Partially done? Early stage? Write options that are specific to this actual project.

Return raw JSON only:
{{
  "presentation": "Looks like / It seems like ... (1-2 sentences, adds new info, warm)",
  "question": {{
    "id": "state",
    "text": "Short question, max 8 words",
    "type": "select",
    "options": ["Specific option A", "Specific option B", "Specific option C"]
  }}
}}

Rules:
- presentation: starts with "Looks like" or "It seems like", 1-2 sentences, no jargon, adds something new
- question text: max 8 words, direct
- options: specific to this project, concrete
- Do NOT include "Other" in options, it is added automatically"""

    stream = MessageStream(
        client,
        model=model,
        max_tokens=512,
        system=JSON_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
    )
    return await with_streaming_overlay(
        "reading between the lines",
        stream,
        lambda text: parse_json(BriefingResponse, text),
        terminal=terminal,
    )


async def generate_synthesis(
    client: anthropic.AsyncAnthropic,
    session: Session,
    *,
    model: str = DEFAULT_BRIEFING_MODEL,
    terminal: Terminal | None = None,
) -> str:
    questions = session.briefing.questions
    if not session.plan.steps or not questions:
        raise RuntimeError("Missing plan or question for synthesis")

    question = questions[0]
    prompt = f"""{VOICE}

One sentence. Acknowledge what they told you, then frame what step 1 is about. Don't re-summarize the project, they know what it is. Forward-facing, specific, warm.

WHAT THEY SAID: "{session.briefing.answers.get(question.id, '')}"
STEP 1: "{session.plan.steps[0]}"

Return raw JSON only:
{{ "synthesis": "..." }}"""

    stream = MessageStream(
        client,
        model=model,
        max_tokens=128,
        system=JSON_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
    )
    return await with_streaming_overlay(
        "putting it together",
        stream,
        lambda text: parse_json(SynthesisResponse, text).synthesis,
        terminal=terminal,
    )


async def ask_question(question: Question, *, terminal: Terminal | None = None) -> str:
    """Ask a model-written question; "Other" lets the user type their own answer."""
    return await select_with_other(
        question.text,
        [Choice(title=option, value=option) for option in question.options],
        terminal=terminal,
    )


async def run_interview(
    client: anthropic.AsyncAnthropic,
    session: Session,
    *,
    model: str = DEFAULT_BRIEFING_MODEL,
    terminal: Terminal | None = None,
) -> bool:
    """Run the briefing. Returns ``True`` when the user is ready to start."""
    terminal = terminal or ProcessTerminal()

    briefing = await generate_briefing(client, session, model=model, terminal=terminal)
    session.briefing.presentation = briefing.presentation
    session.briefing.questions.append(briefing.question)
    log_history(session, "ai", briefing.presentation)

    terminal.write(format_text_block(briefing.presentation, terminal.columns))

    answer = await ask_question(briefing.question, terminal=terminal)
    session.briefing.answers[briefing.question.id] = answer
    log_history(session, "user", f"{briefing.question.text} → {answer}")

    terminal.write("\n")
    synthesis = await generate_synthesis(client, session, model=model, terminal=terminal)
    session.briefing.synthesis = synthesis
    log_history(session, "ai", synthesis)

    terminal.write(format_text_block(synthesis, terminal.columns))

    ready = await select_prompt(
        "Ready to start?",
        [
            Choice(title="Yes, let's go", value="yes"),
            Choice(title="Not right now", value="no"),
        ],
        terminal=terminal,
    )
    logger.info("Interview finished, ready=%s", ready)
    return ready == "yes"
