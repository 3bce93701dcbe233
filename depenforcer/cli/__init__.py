"""Command implementations dispatched from depenforcer.main."""
