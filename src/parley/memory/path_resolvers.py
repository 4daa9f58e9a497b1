"""Shorthand path aliases for memory paths."""

from __future__ import annotations


class AliasPathResolver:
    """Rewrite ``<alias>name`` into ``<prefix>name<postfix>``."""

    def __init__(self, alias: str, prefix: str, postfix: str = "") -> None:
        if not alias:
            raise ValueError("alias must not be empty")
        self.alias = alias.strip()
        self.prefix = prefix.strip()
        self.postfix = postfix.strip()

    def matches(self, path: str) -> bool:
        return path.strip().startswith(self.alias)

    def transform_path(self, path: str) -> str:
        """Return the fully qualified path, or ``path`` unchanged when it does not match."""
        if not self.matches(path):
            return path
        stripped = path.strip()
        return f"{self.prefix}{stripped[len(self.alias) :]}{self.postfix}"


class AtPathResolver(AliasPathResolver):
    """Maps ``@name`` to ``turn.recognized.entities.name[0]``."""

    def __init__(self) -> None:
        super().__init__(alias="@", prefix="turn.recognized.entities.", postfix="[0]")

    def matches(self, path: str) -> bool:
        # "@@" is its own alias; leave it alone.
        stripped = path.strip()
        return stripped.startswith("@") and not stripped.startswith("@@")
