"""A generic maximal-munch tokenizer.

The tokenizer holds an ordered registry of (pattern, token) pairs. To find the
next token it starts one automaton simulation per pattern and feeds them the
input in lockstep, recording after every symbol which pattern (if any) accepts
the input read so far. It stops once every simulation has rejected and reports
the pattern that accepted the longest prefix. When several patterns accept the
same prefix, the one registered first wins, so registration order matters.

Two driving modes share the same simulation:

- yylex():  over an in-memory string, starting at a cursor position;
- fyylex(): over a character stream, buffering the token text and pushing back
  the one character read past the end of the token.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, TextIO

from cky.errors import CkyLoadError
from cky.reader.automaton import Automaton, Simulation, SimState, compile


logger = logging.getLogger(__name__)


class TokenizerSimulation:
    """State of one longest-match search across all registered patterns."""

    __slots__ = (
        "tokenizer",
        "simulations",
        "last_matched_pattern",
        "last_matched_index",
        "last_index",
        "finished",
    )

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer
        self.simulations: list[Simulation] = [p.begin() for p in tokenizer.patterns]
        self.last_matched_pattern = -1
        self.last_matched_index = -1
        self.last_index = -1
        self.finished = False

    def step(self, symbol: str) -> bool:
        """Feed one symbol to every simulation; True once all of them rejected."""
        self.last_index += 1
        all_rejected = True
        for i, sim in enumerate(self.simulations):
            state = sim.step(symbol)
            logger.debug("step %r - pattern %d - %s", symbol, i, state.value)
            if state.is_accepting:
                # Only the first pattern accepting at this index is recorded.
                if self.last_matched_index < self.last_index:
                    self.last_matched_pattern = i
                    self.last_matched_index = self.last_index
                all_rejected = False
            elif state is SimState.NOT_ACCEPTING:
                all_rejected = False
        self.finished = all_rejected
        return self.finished

    def finish(self) -> None:
        """End of input: no simulation can consume anything further."""
        self.finished = True

    @property
    def token(self) -> Any:
        if not self.finished or self.last_matched_pattern < 0:
            return None
        return self.tokenizer.tokens[self.last_matched_pattern]

    @property
    def length(self) -> int:
        if not self.finished:
            return -1
        return self.last_matched_index + 1


class PushbackReader:
    """Character reader over a text stream with one character of pushback."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.pushed: list[str] = []

    def read(self) -> str:
        if self.pushed:
            return self.pushed.pop()
        return self.stream.read(1)

    def unread(self, ch: str) -> None:
        if ch:
            self.pushed.append(ch)

    def at_eof(self) -> bool:
        ch = self.read()
        self.unread(ch)
        return ch == ""


class Tokenizer:
    """Ordered registry of (pattern, token) pairs."""

    def __init__(self):
        self.patterns: list[Automaton] = []
        self.tokens: list[Any] = []

    def add_token(self, pattern: str, token: Any) -> None:
        self.patterns.append(compile(pattern))
        self.tokens.append(token)

    def load(self, text: str, source: str = "<string>") -> None:
        """Register patterns from `pattern<TAB>token` lines.

        Lines starting with '#' and blank lines are ignored. Anything else
        without a tab separator is a load error.
        """
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip() or line.startswith("#"):
                continue
            pattern, sep, token = line.partition("\t")
            if not sep or not pattern or not token.strip():
                raise CkyLoadError(f"{source}:{lineno}: expected 'pattern<TAB>token', got {line!r}")
            try:
                self.add_token(pattern, token.strip())
            except CkyLoadError as exc:
                raise CkyLoadError(f"{source}:{lineno}: {exc}") from exc

    @classmethod
    def from_file(cls, path: Path | str) -> Tokenizer:
        path = Path(path)
        tokenizer = cls()
        tokenizer.load(path.read_text(encoding="utf-8"), source=str(path))
        return tokenizer

    def start(self) -> TokenizerSimulation:
        return TokenizerSimulation(self)

    def yylex(self, text: str, pos: int = 0) -> tuple[Optional[Any], int]:
        """Longest match in `text` starting at `pos`: (token, length).

        The token is None when no pattern matches.
        """
        sim = self.start()
        n = len(text)
        while not sim.finished:
            if pos >= n:
                sim.finish()
                break
            sim.step(text[pos])
            pos += 1
        return sim.token, sim.length

    def fyylex(self, reader: PushbackReader) -> tuple[Optional[Any], int, str]:
        """Longest match read from `reader`: (token, length, text).

        Characters read past the match are not consumed: the one that ended the
        search is pushed back, and any other over-read characters are pushed
        back too so the next call sees them.
        """
        sim = self.start()
        consumed: list[str] = []
        while not sim.finished:
            ch = reader.read()
            if ch == "":
                sim.finish()
                break
            consumed.append(ch)
            sim.step(ch)

        length = sim.length
        keep = max(length, 0)
        for ch in reversed(consumed[keep:]):
            reader.unread(ch)
        return sim.token, length, "".join(consumed[:keep])
