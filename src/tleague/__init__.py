"""Tennis league manager: monthly groups, a Master bracket and rankings."""

__version__ = "0.1.0"
