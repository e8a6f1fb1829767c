"""Emergency Network - school staff registry and emergency contact chart."""

__version__ = "0.1.0"
