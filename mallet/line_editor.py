"""Interactive line input backed by prompt_toolkit."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from mallet.config import get_history_file


class LineEditor:
    """Reads one line at a time; entries are appended to a history file."""

    def __init__(self, history_file: Optional[Path] = None, *, persist: bool = True) -> None:
        self.history_file = history_file or get_history_file()
        self._session: PromptSession[str] = self._build_session(persist)

    def _build_session(self, persist: bool) -> PromptSession[str]:
        if not persist:
            return PromptSession(history=InMemoryHistory())
        self.history_file.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("line editor history at {}", self.history_file)
        return PromptSession(history=FileHistory(str(self.history_file)))

    def read_line(self, prompt: str) -> Optional[str]:
        """Return the next line, "" after Ctrl-C, or None at end of input."""
        try:
            line = self._session.prompt(prompt)
        except KeyboardInterrupt:
            return ""
        except EOFError:
            return None
        return line.rstrip("\n")


def read_line(prompt: str) -> Optional[str]:
    """One-shot read without history, used by the `readline` builtin."""
    return LineEditor(persist=False).read_line(prompt)
