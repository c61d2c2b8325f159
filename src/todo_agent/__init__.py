"""Natural-language todo list agent."""

__version__ = "0.1.0"
