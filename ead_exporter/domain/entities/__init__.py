from .records import ArchivalObject, Resource

__all__ = ["ArchivalObject", "Resource"]
