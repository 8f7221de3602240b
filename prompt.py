# prompt.py
"""
Interactive selection prompts.

- Prompter owns the console and the input stream used to read answers.
- ask() repeats the same question until the validator accepts the answer.
- Validators take (answer, options) and return a ValidationResult.
"""

from typing import Any, Callable, Optional, Sequence, TextIO

from rich.console import Console

from inspector.regions import strip_default_label
from models import SCENARIOS, ValidationResult


Validator = Callable[[str, Optional[Sequence[Any]]], ValidationResult]

DEFAULT_INVALID_MESSAGE = "Invalid selection. Please try again."


class Prompter:
    """
    Line-reading interface for the interactive session.

    With no stream, answers come from the terminal through Rich's Console.input.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self._stream = stream
        self._closed = False

    def __enter__(self) -> "Prompter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._stream is not None:
            self._stream.close()

    def read_line(self, question: str) -> str:
        if self._closed:
            raise EOFError("prompt is closed")
        answer = self.console.input(question, stream=self._stream)
        # A stream signals end of input with an empty string; input() raises EOFError itself
        if self._stream is not None and answer == "":
            raise EOFError("end of input")
        return answer.strip()

    def ask(self, question: str, options: Optional[Sequence[Any]], validator: Validator) -> Any:
        """
        Ask until the validator accepts the answer and return its value. There is no retry limit.
        """
        while True:
            answer = self.read_line(question)
            result = validator(answer, options)
            if result.valid:
                return result.value
            self.console.print(result.message or DEFAULT_INVALID_MESSAGE)

    def show_options(self, title: str, options: Sequence[Any]) -> None:
        self.console.print(f"\n{title}")
        for index, option in enumerate(options, start=1):
            self.console.print(f"{index}. {option}", highlight=False, markup=False)


def _pick_index(answer: str, options: Sequence[Any]) -> Optional[int]:
    try:
        index = int(answer) - 1
    except (TypeError, ValueError):
        return None
    if index < 0 or index >= len(options):
        return None
    return index


def profile_validator(answer: str, profiles: Sequence[str]) -> ValidationResult:
    index = _pick_index(answer, profiles)
    if index is None:
        return ValidationResult(False, message="Invalid profile number. Please try again.")
    return ValidationResult(True, profiles[index])


def region_validator(answer: str, regions: Sequence[str]) -> ValidationResult:
    index = _pick_index(answer, regions)
    if index is None:
        return ValidationResult(False, message="Invalid region number. Please try again.")
    return ValidationResult(True, strip_default_label(regions[index]))


def scenario_validator(answer: str, options: Optional[Sequence[Any]] = None) -> ValidationResult:
    if answer not in SCENARIOS:
        return ValidationResult(False, message="Please enter 1, 2, or 3.")
    return ValidationResult(True, answer)
