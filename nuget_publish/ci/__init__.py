"""CI integration."""

from nuget_publish.ci.outputs import OutputWriter

__all__ = ["OutputWriter"]
