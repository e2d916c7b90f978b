"""deepdives - Digest of open deep-dive issues that need volunteers or follow-up."""

from deepdives.deep_dives import get_and_format_deep_dive_updates

__version__ = "0.1.0"

__all__ = ["__version__", "get_and_format_deep_dive_updates"]
