"""Building blocks for an OpenCode agent loop: argument lists, output parsers, loop state and plugin discovery."""

__version__ = "1.3.0"