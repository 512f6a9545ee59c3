"""SFS skill pack and tooling to parse, validate and serve it."""

__version__ = "0.1.0"
