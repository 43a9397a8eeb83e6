"""Context-free grammar symbols, prediction sets, minimal distances and sequence rewriting."""

__version__ = "0.1.0"
__all__ = ["symbol", "intern", "grammar", "predict", "distance", "sequence", "rewrite"]