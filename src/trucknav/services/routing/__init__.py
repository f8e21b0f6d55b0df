"""Route request building, calculation and result parsing."""
