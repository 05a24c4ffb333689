"""KeyRedact command line tooling."""

__version__ = "0.1.0"
