# cky: a small reference-counted Lisp.
#
# Code (forms) and runtime values share one representation: the Value classes
# in cky.types. The reader produces Values, the evaluator consumes and produces
# Values, and every owning reference is tracked through incref/decref.

__version__ = "0.1.0"
