"""Blog app tests package."""
