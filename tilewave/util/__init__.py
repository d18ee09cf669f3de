"""Generic helpers: seeded randomness and the 2D grid container."""
