"""Memory path helpers."""

from parley.memory.path_resolvers import AliasPathResolver, AtPathResolver

__all__ = ["AliasPathResolver", "AtPathResolver"]
