"""Configuration management for the publish tool."""

from nuget_publish.config.loader import load_inputs
from nuget_publish.config.models import PublishConfig, PublishInputs, format_tag
from nuget_publish.config.resolve import resolve_config

__all__ = [
    "PublishInputs",
    "PublishConfig",
    "format_tag",
    "load_inputs",
    "resolve_config",
]
