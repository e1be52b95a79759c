"""Chat platform providers."""
