"""HTTP API for the StackIt application."""
