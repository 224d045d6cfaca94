"""
  Step-wise regular expression automata

- compile(pattern) builds a Thompson NFA from a small regex dialect
- Automaton.begin() starts a Simulation that is fed one symbol at a time
- after every step the simulation reports a SimState

Python's `re` can only answer "does this whole string match", not "where is
the match after this next character", which is what maximal munch needs. The
tokenizer drives one Simulation per registered pattern in lockstep.

Supported syntax:

    a         literal character
    .         any character
    \\s \\d \\w  whitespace, ASCII digit, word character (and \\S \\D \\W)
    \\x        any other escaped character is literal (\\n and \\t are newline/tab)
    [a-z_]    bracket class with ranges; [^...] negates
    (r)       group
    r|s       alternation
    r* r+ r?  repetition
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from cky.errors import CkyLoadError


Matcher = Callable[[str], bool]


class SimState(Enum):
    REJECTED = "rejected"          # no live states, can never match again
    NOT_ACCEPTING = "not-accepting"  # live, but the input so far is not a match
    ACCEPTING = "accepting"        # the input so far matches and may be extended
    ACCEPTED = "accepted"          # the input so far matches and cannot be extended

    @property
    def is_accepting(self) -> bool:
        return self in (SimState.ACCEPTING, SimState.ACCEPTED)


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_word(c: str) -> bool:
    return c.isalnum() or c == "_"


CLASS_ESCAPES: dict[str, Matcher] = {
    "s": str.isspace,
    "S": lambda c: not c.isspace(),
    "d": _is_digit,
    "D": lambda c: not _is_digit(c),
    "w": _is_word,
    "W": lambda c: not _is_word(c),
}

LITERAL_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def _literal(ch: str) -> Matcher:
    return lambda c: c == ch


def _any(_: str) -> bool:
    return True


@dataclass
class Automaton:
    """A compiled NFA. States are integers; `accept` is the single final state."""

    pattern: str
    start: int
    accept: int
    edges: list[list[tuple[Matcher, int]]]
    epsilon: list[list[int]]
    step_cache_limit: int = field(default=4096, repr=False)
    _steps: dict[tuple[frozenset[int], str], frozenset[int]] = field(
        default_factory=dict, repr=False
    )

    def closure(self, states: Iterable[int]) -> frozenset[int]:
        seen = set(states)
        stack = list(seen)
        while stack:
            s = stack.pop()
            for t in self.epsilon[s]:
                if t not in seen:
                    seen.add(t)
                    stack.append(t)
        return frozenset(seen)

    def advance(self, current: frozenset[int], symbol: str) -> frozenset[int]:
        key = (current, symbol)
        nxt = self._steps.get(key)
        if nxt is None:
            targets = [t for s in current for (match, t) in self.edges[s] if match(symbol)]
            nxt = self.closure(targets)
            if len(self._steps) >= self.step_cache_limit:
                self._steps.clear()
            self._steps[key] = nxt
        return nxt

    def begin(self) -> Simulation:
        return Simulation(self)

    def matches(self, text: str) -> bool:
        """Whole-string match, mostly useful for tests and diagnostics."""
        sim = self.begin()
        for ch in text:
            if sim.step(ch) is SimState.REJECTED:
                return False
        return sim.state.is_accepting


class Simulation:
    """One run of an Automaton over an input, one symbol at a time."""

    __slots__ = ("automaton", "current")

    def __init__(self, automaton: Automaton):
        self.automaton = automaton
        self.current: frozenset[int] = automaton.closure([automaton.start])

    def step(self, symbol: str) -> SimState:
        if self.current:
            self.current = self.automaton.advance(self.current, symbol)
        return self.state

    @property
    def state(self) -> SimState:
        if not self.current:
            return SimState.REJECTED
        if self.automaton.accept in self.current:
            edges = self.automaton.edges
            if any(edges[s] for s in self.current):
                return SimState.ACCEPTING
            return SimState.ACCEPTED
        return SimState.NOT_ACCEPTING


class _Builder:
    """Thompson construction: every fragment is a (start, end) pair of states."""

    def __init__(self):
        self.edges: list[list[tuple[Matcher, int]]] = []
        self.epsilon: list[list[int]] = []

    def state(self) -> int:
        self.edges.append([])
        self.epsilon.append([])
        return len(self.edges) - 1

    def symbol(self, matcher: Matcher) -> tuple[int, int]:
        s, e = self.state(), self.state()
        self.edges[s].append((matcher, e))
        return s, e

    def empty(self) -> tuple[int, int]:
        s, e = self.state(), self.state()
        self.epsilon[s].append(e)
        return s, e

    def concat(self, a: tuple[int, int], b: tuple[int, int]) -> tuple[int, int]:
        self.epsilon[a[1]].append(b[0])
        return a[0], b[1]

    def alternate(self, a: tuple[int, int], b: tuple[int, int]) -> tuple[int, int]:
        s, e = self.state(), self.state()
        self.epsilon[s].extend((a[0], b[0]))
        self.epsilon[a[1]].append(e)
        self.epsilon[b[1]].append(e)
        return s, e

    def repeat(self, a: tuple[int, int], op: str) -> tuple[int, int]:
        s, e = self.state(), self.state()
        self.epsilon[s].append(a[0])
        self.epsilon[a[1]].append(e)
        if op in "*?":
            self.epsilon[s].append(e)
        if op in "*+":
            self.epsilon[a[1]].append(a[0])
        return s, e


class _PatternParser:
    """Recursive descent over the pattern text, emitting Thompson fragments."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0
        self.builder = _Builder()

    def error(self, message: str) -> CkyLoadError:
        return CkyLoadError(f"invalid pattern {self.pattern!r} at offset {self.pos}: {message}")

    def peek(self) -> str | None:
        return self.pattern[self.pos] if self.pos < len(self.pattern) else None

    def take(self) -> str:
        ch = self.peek()
        if ch is None:
            raise self.error("unexpected end of pattern")
        self.pos += 1
        return ch

    def parse(self) -> Automaton:
        start, end = self.parse_alternation()
        if self.peek() is not None:
            raise self.error(f"unbalanced {self.peek()!r}")
        b = self.builder
        return Automaton(self.pattern, start, end, b.edges, b.epsilon)

    def parse_alternation(self) -> tuple[int, int]:
        frag = self.parse_concat()
        while self.peek() == "|":
            self.pos += 1
            frag = self.builder.alternate(frag, self.parse_concat())
        return frag

    def parse_concat(self) -> tuple[int, int]:
        frag = None
        while self.peek() not in (None, "|", ")"):
            piece = self.parse_repeat()
            frag = piece if frag is None else self.builder.concat(frag, piece)
        return frag if frag is not None else self.builder.empty()

    def parse_repeat(self) -> tuple[int, int]:
        if self.peek() in ("*", "+", "?"):
            raise self.error("nothing to repeat")
        frag = self.parse_atom()
        while self.peek() in ("*", "+", "?"):
            frag = self.builder.repeat(frag, self.take())
        return frag

    def parse_atom(self) -> tuple[int, int]:
        ch = self.take()
        if ch == "(":
            frag = self.parse_alternation()
            if self.peek() != ")":
                raise self.error("missing ')'")
            self.pos += 1
            return frag
        if ch == "[":
            return self.builder.symbol(self.parse_class())
        if ch == ".":
            return self.builder.symbol(_any)
        if ch == "\\":
            return self.builder.symbol(self.parse_escape())
        return self.builder.symbol(_literal(ch))

    def parse_escape(self) -> Matcher:
        ch = self.take()
        if ch in CLASS_ESCAPES:
            return CLASS_ESCAPES[ch]
        return _literal(LITERAL_ESCAPES.get(ch, ch))

    def parse_class_char(self) -> str | Matcher:
        ch = self.take()
        if ch != "\\":
            return ch
        esc = self.take()
        if esc in CLASS_ESCAPES:
            return CLASS_ESCAPES[esc]
        return LITERAL_ESCAPES.get(esc, esc)

    def parse_class(self) -> Matcher:
        negate = False
        if self.peek() == "^":
            negate = True
            self.pos += 1
        items: list[Matcher] = []
        first = True
        while True:
            if self.peek() is None:
                raise self.error("missing ']'")
            if self.peek() == "]" and not first:
                self.pos += 1
                break
            first = False
            lo = self.parse_class_char()
            if callable(lo):
                items.append(lo)
                continue
            if self.peek() == "-" and self.pos + 1 < len(self.pattern) and self.pattern[self.pos + 1] != "]":
                self.pos += 1
                hi = self.parse_class_char()
                if callable(hi) or hi < lo:
                    raise self.error(f"bad range {lo}-{hi}")
                items.append(lambda c, lo=lo, hi=hi: lo <= c <= hi)
            else:
                items.append(_literal(lo))

        if negate:
            return lambda c: not any(m(c) for m in items)
        return lambda c: any(m(c) for m in items)


def compile(pattern: str) -> Automaton:
    """Compile `pattern` into an Automaton; raises CkyLoadError if malformed."""
    return _PatternParser(pattern).parse()
