from __future__ import annotations
import os
from pathlib import Path


# Resolve installation dir (cky package directory)
_CKY_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_LEXER_PATTERNS = _CKY_DIR / 'reader' / 'lisp.lex'
_DEFAULT_MAX_DEPTH = 100
_DEFAULT_LOG_LEVEL = 'WARNING'


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip())


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{var} must be an integer, got {raw!r}') from None


def get_lexer_patterns_path() -> Path:
    return path_from_env('CKY_LEXER_PATTERNS', _DEFAULT_LEXER_PATTERNS)


def get_max_depth() -> int:
    depth = int_from_env('CKY_MAX_DEPTH', _DEFAULT_MAX_DEPTH)
    if depth < 1:
        raise ValueError(f'CKY_MAX_DEPTH must be positive, got {depth}')
    return depth


def get_log_level() -> str:
    return os.environ.get('CKY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
