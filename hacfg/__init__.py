"""Parsers that read and write single HAProxy configuration directives."""

__version__ = "0.1.0"
__all__ = ["model", "simple", "parsers", "tcp"]