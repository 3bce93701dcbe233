"""depenforcer - check that a module depends on every project in its build.

Layout:
- model: Module / DependencyRecord / BuildSession value types
- config/: Pydantic rule parameters and the resolved scope configuration
- rules/: selector matching, scanning, gap detection and reporting
- parsers/maven/: reads a multi-module Maven build into a BuildSession
- cli/: command implementations used by depenforcer.main
"""

__version__ = "0.1.0"
