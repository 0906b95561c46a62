"""Splitting of a command line into positional arguments and options."""

from __future__ import annotations


class CmdParser:
    """Splits a command into positional args and ``-option value`` pairs.

    ``print -showid false`` gives positional args ``["print"]`` and the
    option ``{"-showid": "false"}``. Parsing only; nothing is executed.
    """

    def __init__(self) -> None:
        self.positional_args: list[str] = []
        self.options: dict[str, str] = {}

    def parse(self, cmd: str) -> CmdParser:
        self.positional_args = []
        self.options = {}
        current_option = ""
        for token in cmd.split():
            if token.startswith("-"):
                current_option = token
                self.options[current_option] = ""
            elif current_option:
                self.options[current_option] = token
                current_option = ""
            else:
                self.positional_args.append(token)
        return self

    def option(self, name: str) -> str:
        """Value of ``name`` (including its dash), or "" when absent."""
        return self.options.get(name, "")

    def arg(self, index: int) -> str:
        """Positional argument at ``index``, or "" when out of range."""
        if 0 <= index < len(self.positional_args):
            return self.positional_args[index]
        return ""

    def join(self, begin: int, end: int) -> str:
        """Positional args ``begin`` up to ``end`` joined by single spaces."""
        if begin < 0 or begin >= len(self.positional_args) or end <= 0:
            return ""
        return " ".join(self.positional_args[begin:end])