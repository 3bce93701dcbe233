"""Runtime helpers: configuration loading."""
