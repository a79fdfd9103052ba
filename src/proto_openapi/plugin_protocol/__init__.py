"""protoc plugin protocol exports."""

from .plugin_io import PLUGIN_NAME, handle_request, main

__all__ = ["PLUGIN_NAME", "handle_request", "main"]
