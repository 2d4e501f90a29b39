"""Navigation between screens."""

from wellcare.navigation.navigator import Navigator, RouteDefinition, TabGroupDefinition

__all__ = ["Navigator", "RouteDefinition", "TabGroupDefinition"]
