from filters.classifier import is_displayable, is_removed

__all__ = ["is_displayable", "is_removed"]
