"""Configuration management for dirbrowse.

This package provides the scope model and the components for parsing
and validating it from command-line arguments and config files.

Modules:
- scope: the Config object, one per browsing scope
- parsers: Parse CLI arguments (scopes, template variables)
- validators: Validate parsed configuration
"""

from .parsers import ScopeParser, VarParser
from .scope import Config
from .validators import ScopeValidator

__all__ = [
    "Config",
    "ScopeParser",
    "ScopeValidator",
    "VarParser",
]
