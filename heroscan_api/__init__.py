"""HTTP service exposing heroscan extraction."""
