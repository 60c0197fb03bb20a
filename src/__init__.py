"""autodocumentator: incremental AI test-documentation coordinator."""

from autodocumentator.version import __version__

__all__ = ["__version__"]
