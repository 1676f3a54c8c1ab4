"""LayerLens - cascade layer order lookup for stylesheet projects."""

__version__ = "0.1.0"
