"""Configuration system for StepWalk.

This module defines how users specify their walk requirements: whether
the root itself is reported, how deep to descend, how symlinks and hidden
entries are treated, and which directories to prune.
"""

from dataclasses import dataclass
from typing import Optional, Callable, Any, List


@dataclass
class WalkConfig:
    """Complete configuration for a directory walk.

    ``follow_symlinks`` and ``include_hidden`` are only consulted when the
    iterator builds its own FileSystemAdapter; an explicit adapter carries
    its own settings.
    """

    # Output shape
    include_root: bool = False                  # Produce the root before its children
    max_depth: Optional[int] = None             # Deepest directory to descend into (root = 0)

    # Default adapter settings
    follow_symlinks: bool = False               # Treat links to directories as directories
    include_hidden: bool = True                 # Report dot-entries

    # Pruning (used by the high-level walk API)
    prune: Optional[Callable[[Any], bool]] = None  # Skip subtrees of matching directories

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'WalkConfig':
        """Create config for shallow scanning.

        Args:
            max_depth: How deep to scan (default 1 = immediate children only)

        Returns:
            WalkConfig for shallow scanning
        """
        return cls(max_depth=max_depth)

    def should_descend(self, depth: int) -> bool:
        """Check if a directory produced at ``depth`` should be entered."""
        if self.max_depth is None:
            return True
        return depth < self.max_depth

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_depth is not None:
            if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
                errors.append("max_depth must be an integer")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if self.prune is not None and not callable(self.prune):
            errors.append("prune must be callable")

        return errors
