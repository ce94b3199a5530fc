"""Two short model calls on the fast model.

``analyze_project`` runs once, before the menu, and answers "what is this?".
``generate_steps`` runs after a mode is picked and returns the 2-5 high level
steps for that mode on this particular project.
"""

from __future__ import annotations

import logging

import anthropic

from reenter.ai import JSON_SYSTEM_PROMPT, parse_json, response_text
from reenter.config import DEFAULT_SUMMARY_MODEL
from reenter.types import Analysis, Steps

logger = logging.getLogger(__name__)

SUMMARY_PREFILL = '{"summary": "This looks like'

MODE_INTENT: dict[str, str] = {
    "run": (
        "run this project locally, the cheapest, fastest path to seeing it alive again. "
        "No production concerns, no polish. Just: what does it take to get this running "
        "on their machine?"
    ),
    "browse": (
        "understand this codebase, find the single conceptual path from A to Z that gives "
        "the clearest picture of how it works."
    ),
    "mvp": (
        "get this in front of real users, the fastest, cheapest path from local to "
        "something others can actually use."
    ),
    "ship": "modernize, fix issues, and deploy this properly. Clean it up and take it all the way.",
}


def _project_context(structure: str, key_files: str) -> str:
    return f"FILE STRUCTURE:\n{structure}\n\nKEY FILE CONTENTS:\n{key_files or 'No key files found.'}"


async def analyze_project(
    client: anthropic.AsyncAnthropic,
    structure: str,
    key_files: str,
    *,
    model: str = DEFAULT_SUMMARY_MODEL,
) -> Analysis:
    prompt = f"""What is this project? Describe it in 1-2 plain english sentences. No jargon. What does it do, not how it's built.

{_project_context(structure, key_files)}

Return raw JSON only:
{{ "summary": "This looks like ..." }}"""

    response = await client.messages.create(
        model=model,
        max_tokens=256,
        system=JSON_SYSTEM_PROMPT,
        messages=[
            {"role": "user", "content": prompt},
            # Prefill so the answer always opens the same way.
            {"role": "assistant", "content": SUMMARY_PREFILL},
        ],
    )
    analysis = parse_json(Analysis, SUMMARY_PREFILL + response_text(response))
    logger.info("Project summary: %s", analysis.summary)
    return analysis


async def generate_steps(
    client: anthropic.AsyncAnthropic,
    mode_value: str,
    structure: str,
    key_files: str,
    *,
    model: str = DEFAULT_SUMMARY_MODEL,
) -> list[str]:
    intent = MODE_INTENT.get(mode_value)
    if intent is None:
        raise ValueError(f"Unknown mode: {mode_value}")

    prompt = f"""A self-taught developer wants to {intent}

{_project_context(structure, key_files)}

What are the 2-5 high level steps to do this for this specific project?

Rules:
- Steps are high level only, no commands, no file names yet
- Plain english, no jargon
- Specific to this actual project, never generic
- 2 to 5 steps, never pad

Return raw JSON only:
{{ "steps": ["Step one", "Step two", "..."] }}"""

    response = await client.messages.create(
        model=model,
        max_tokens=512,
        system=JSON_SYSTEM_PROMPT,
        messages=[
            {"role": "user", "content": prompt},
            {"role": "assistant", "content": "{"},
        ],
    )
    steps = parse_json(Steps, "{" + response_text(response)).steps
    logger.info("Generated %d steps for mode %s", len(steps), mode_value)
    return steps
