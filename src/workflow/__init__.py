"""The "add a package" workflow and the collaborator contracts it drives."""

from .add import AddProcess, normalize_package_name
from .prompt import ask_yes_no

__all__ = ["AddProcess", "ask_yes_no", "normalize_package_name"]
