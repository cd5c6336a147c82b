"""Interactive console prompts."""

from typing import Callable

_YES = ("y", "yes")
_NO = ("n", "no")


def ask_yes_no(question: str, input_func: Callable[[str], str] = input) -> bool:
    """Ask until the answer is yes or no."""
    while True:
        answer = input_func(f"{question} [y/n] ").strip().lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
