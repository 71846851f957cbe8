"""
Type definitions for the compass routing package.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeAlias

# ASGI scope, as accepted by RequestContext.from_scope()
Scope: TypeAlias = MutableMapping[str, Any]

# Route definition types
Defaults: TypeAlias = Mapping[str, Any]
Requirements: TypeAlias = Mapping[str, str]

# Matching / generation results
Parameters: TypeAlias = dict[str, Any]
