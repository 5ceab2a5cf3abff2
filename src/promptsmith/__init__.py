"""promptsmith - placeholder formatting for prompt templates."""

__version__ = "0.1.0"
