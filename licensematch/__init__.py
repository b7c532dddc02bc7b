"""
licensematch: check license text against structured license templates.

A license template is a sequence of literal text, variable placeholders
(matched by a regular expression) and optional regions. This package takes
the event stream produced by a template parser, builds an instruction tree
from it and aligns that tree with the tokens of a concrete license text. The
result is either a match or the first point of divergence with its line and
column in the compare text.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
