"""Note junction: group knowledge-base notes by their most common references."""

__version__ = "0.3.0"
