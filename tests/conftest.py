import io

import pytest

from cky.reader.lexer import lex_stream
from cky.types import live_values

# This test configuration runs every test twice:
# 1) with the bulk lexer, which scans an in-memory string ["bulk"]
# 2) with the incremental lexer, which reads characters from a stream and
#    pushes back the ones it over-read ["stream"]
# Interpreter sessions call `lex` on the code they are fed. For the stream run
# an autouse fixture swaps in a lexer that feeds the same code through a
# character stream, so individual test files need not know about the mode.


@pytest.fixture(params=["bulk", "stream"])
def lexer_mode(request):
    return request.param


@pytest.fixture(autouse=True)
def _force_lexer_mode(lexer_mode, monkeypatch):
    if lexer_mode == "stream":
        def streaming_lex(source, tokenizer=None):
            return lex_stream(io.StringIO(source), tokenizer)

        monkeypatch.setattr("cky.interpreter.lex", streaming_lex)


@pytest.fixture
def balanced():
    """Fail the test if it leaves values alive that were not alive before."""
    before = live_values()
    yield
    assert live_values() == before


@pytest.fixture
def interp():
    from cky.interpreter import Interpreter

    with Interpreter() as session:
        yield session


@pytest.fixture
def run_code(interp):
    """Evaluate code in a session and return the printed form of the last result."""

    def run(code):
        value = interp.eval(code)
        try:
            return str(value)
        finally:
            value.decref()

    return run
