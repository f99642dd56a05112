"""HTTP surface for the explorer."""
