from enum import Enum


class DiscoveryTier(str, Enum):
    """Ordered tiers consulted when looking for a context factory.

    Attributes:
        PROPERTIES: The reserved key in the caller's properties map.
        ENVIRONMENT: The reserved key in the process environment.
        ENTRY_POINTS: Factories registered in the entry-point group.
        PROPERTIES_FILE: A ``binding.properties`` resource beside the content classes.
        DEFAULT: The factory bundled with the library.
    """

    PROPERTIES = "properties"
    ENVIRONMENT = "environment"
    ENTRY_POINTS = "entry_points"
    PROPERTIES_FILE = "properties_file"
    DEFAULT = "default"

    def __str__(self) -> str:
        return self.value
