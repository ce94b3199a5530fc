from reenter.walkthrough.git import check_git_state, next_commit_message, save_starting_point
from reenter.walkthrough.steps import walk_steps

__all__ = ["check_git_state", "next_commit_message", "save_starting_point", "walk_steps"]
