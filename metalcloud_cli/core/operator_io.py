"""
OperatorIO — Injected capability for blocking operator input

Commands never call input() directly. They receive an OperatorIO so that
the terminal can be swapped for scripted answers in tests and automation.
"""

import getpass
import sys
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional


class OperatorIO(ABC):
    """Capability for prompting the operator."""

    @abstractmethod
    def ask(self, message: str) -> str:
        """Show message and return one line of input ("" on end of input)."""

    @abstractmethod
    def ask_secret(self, message: str) -> str:
        """Show message and read one line without echoing it."""


class TerminalIO(OperatorIO):
    """Prompts on the controlling terminal."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr

    def ask(self, message: str) -> str:
        if message:
            print(message, end=" ", file=self.stream, flush=True)
        try:
            return input()
        except EOFError:
            return ""

    def ask_secret(self, message: str) -> str:
        try:
            return getpass.getpass(f"{message} ", stream=self.stream)
        except EOFError:
            return ""


class ScriptedIO(OperatorIO):
    """
    Answers prompts from a pre-recorded script.

    Records every prompt shown so callers can check what the operator
    would have seen. Running out of answers behaves like end of input.
    """

    def __init__(self, answers: Iterable[str] = (), secrets: Iterable[str] = ()):
        self._answers = list(answers)
        self._secrets = list(secrets)
        self.prompts: List[str] = []

    def ask(self, message: str) -> str:
        self.prompts.append(message)
        return self._answers.pop(0) if self._answers else ""

    def ask_secret(self, message: str) -> str:
        self.prompts.append(message)
        return self._secrets.pop(0) if self._secrets else ""

    @property
    def last_prompt(self) -> Optional[str]:
        return self.prompts[-1] if self.prompts else None
