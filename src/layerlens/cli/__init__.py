"""LayerLens CLI."""
