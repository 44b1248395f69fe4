"""Version/tag derivation and branch-gated promotion for Maven container builds."""

__version__ = "0.1.0"
