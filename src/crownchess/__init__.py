"""Crown & Capture: chess movement rules fused with RPG combat."""

__version__ = "0.1.0"
