"""Builtin functions and argument checking for the cky global scope."""
