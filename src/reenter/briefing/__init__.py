from reenter.briefing.interview import (
    ask_question,
    generate_briefing,
    generate_synthesis,
    run_interview,
)

__all__ = ["ask_question", "generate_briefing", "generate_synthesis", "run_interview"]
