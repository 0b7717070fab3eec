"""Transport adapters for the remote tagging and secrets APIs."""
