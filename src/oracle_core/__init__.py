"""Cross-sourced crypto price oracle."""

__version__ = "1.0.0"
