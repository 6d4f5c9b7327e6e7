"""Configuration for graph-stack stores and their enumerators."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GraphStackConfig:
    """Validation switches for a `GraphStack`."""

    # Check that ids passed to add_ancestors() name existing nodes,
    # the same way push() always does.
    validate_added_ancestors: bool = True

    # Refuse to descend into a node already on the current path.
    # When off, cyclic ancestor data makes enumeration run forever.
    detect_cycles: bool = True

    def with_overrides(self, **changes: bool) -> "GraphStackConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


# Global configuration instance
DEFAULT_CONFIG = GraphStackConfig()
