"""University handbook API: accounts, course lists, rated course comments."""

__version__ = "0.1.0"
