"""Grid raycaster that loads .cub levels and renders them first-person."""

__version__ = "0.1.0"
__all__ = ["__version__"]