"""Build-tool adapters that turn a project tree into a BuildSession."""
