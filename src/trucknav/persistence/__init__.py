"""Local persistence for saved results."""
