"""User interfaces built on top of the engine."""
