"""Runtime package: settings, logging and dependency wiring for the server."""

__all__: list[str] = []
