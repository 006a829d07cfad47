"""A tile-based side-scrolling platformer on an entity-component system."""

__version__ = "0.1.0"