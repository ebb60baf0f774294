"""AHA guideline search exposed over an MCP server."""

from importlib import metadata


def get_version() -> str:
    try:
        return metadata.version("ahaguide")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
