"""tourmatch: match people to group tours and notify on confirmation."""

__version__ = "0.1.0"
