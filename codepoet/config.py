"""
Configuration for rendering Java files.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field


@dataclass
class RenderConfig:
    """Configuration options for rendering."""

    # One level of indentation
    indent: str = "  "

    # Line length at which wrap points inside statements break
    column_limit: int = 100

    # Packages whose classes are always visible and never imported
    always_in_scope: list[str] = field(default_factory=lambda: ["java.lang"])

    # Import groups, in order; imports outside every group form a final group
    import_groups: list[str] = field(default_factory=lambda: ["java", "javax"])

    # Simple names that are always written fully qualified
    always_qualify: list[str] = field(default_factory=list)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> RenderConfig:
        """Create a config from a dictionary."""
        config = RenderConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def copy(self) -> RenderConfig:
        """Return a copy that shares no lists with this config."""
        return RenderConfig.from_dict(deepcopy(self.to_dict()))

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "indent": self.indent,
            "column_limit": self.column_limit,
            "always_in_scope": self.always_in_scope,
            "import_groups": self.import_groups,
            "always_qualify": self.always_qualify,
            "add_generation_comment": self.add_generation_comment,
        }
