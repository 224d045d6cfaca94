import pytest

from cky.errors import CkyLoadError
from cky.reader.automaton import SimState, compile


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("a", "a", True),
        ("a", "b", False),
        ("a", "", False),
        ("abc", "abc", True),
        ("abc", "ab", False),
        ("a*", "", True),
        ("a*", "aaaa", True),
        ("a+", "", False),
        ("a+", "aaa", True),
        ("ab?c", "ac", True),
        ("ab?c", "abc", True),
        ("ab?c", "abbc", False),
        ("a|bc", "bc", True),
        ("a|bc", "ab", False),
        ("(ab)+", "ababab", True),
        ("(ab)+", "aba", False),
        (".", "x", True),
        (r"\d+", "0123", True),
        (r"\d+", "12a", False),
        (r"\s+", " \t\n", True),
        (r"\w+", "ab_9", True),
        (r"\(", "(", True),
        (r"\)", ")", True),
        ("[a-c]+", "abcab", True),
        ("[a-c]", "d", False),
        ("[^a-c]", "d", True),
        ("[^a-c]", "a", False),
        ("[ab-]+", "a-b", True),
        ("[*?+]+", "*?+", True),
        (r"[\d_]+", "1_2", True),
        (r"'\(", "'(", True),
    ],
)
def test_whole_string_matches(pattern, text, expected):
    assert compile(pattern).matches(text) is expected


def test_simulation_reports_states_step_by_step():
    sim = compile("ab+").begin()
    assert sim.state is SimState.NOT_ACCEPTING
    assert sim.step("a") is SimState.NOT_ACCEPTING
    assert sim.step("b") is SimState.ACCEPTING
    assert sim.step("b") is SimState.ACCEPTING
    assert sim.step("c") is SimState.REJECTED
    # Once rejected, a simulation stays rejected.
    assert sim.step("b") is SimState.REJECTED


def test_accepted_when_no_extension_is_possible():
    sim = compile(r"'\(").begin()
    assert sim.step("'") is SimState.NOT_ACCEPTING
    assert sim.step("(") is SimState.ACCEPTED
    assert sim.state.is_accepting


def test_simulations_are_independent():
    automaton = compile("ab")
    first, second = automaton.begin(), automaton.begin()
    first.step("a")
    assert second.step("b") is SimState.REJECTED
    assert first.step("b") is SimState.ACCEPTED


def test_step_cache_stays_bounded():
    automaton = compile(".+")
    automaton.step_cache_limit = 16
    text = "".join(chr(0x4e00 + i) for i in range(200))
    assert automaton.matches(text)
    assert len(automaton._steps) <= 16
    assert automaton.matches(text[::-1])


@pytest.mark.parametrize("pattern", ["(", "(a", "a)", "[a-", "[abc", "*a", "a|+", "[z-a]", "\\"])
def test_malformed_patterns_raise(pattern):
    with pytest.raises(CkyLoadError, match="invalid pattern"):
        compile(pattern)
