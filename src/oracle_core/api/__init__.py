"""HTTP boundary for the oracle."""
