"""Infrastructure layer for the EAD exporter.

Adapters for record loading, label lookup, logging and EAD rendering. It
implements the ports defined in the application layer.
"""

__all__ = []
