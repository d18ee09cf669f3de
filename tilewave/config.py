"""
Configuration constants.

Centralizes the tunable values used by the engine and the command-line demo.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = 1337
RANDOM_SEED = None

# =============================================================================
# PSEUDO-RANDOM GENERATOR
# =============================================================================

PRNG_MULTIPLIER = 15485863  # The millionth prime
PRNG_MODULUS = 2038074743

# Upper bound for fresh seeds drawn from system entropy
PRNG_MAX_SEED = 2**31 - 1

# =============================================================================
# WAVE FUNCTION COLLAPSE
# =============================================================================

# Per-cell noise added to the initial entropy so cells never tie exactly.
# Small enough that it never reorders cells with different option sets.
ENTROPY_NOISE_EPSILON = 1e-12

# Full-grid restarts allowed per run before giving up. None = unbounded.
MAX_RESTARTS: int | None = 10_000

# Wall-clock seconds allowed per run before giving up. None = unbounded.
TIME_BUDGET_SECONDS: float | None = None

# =============================================================================
# DEMO / CLI
# =============================================================================

DEMO_WIDTH = 24
DEMO_HEIGHT = 12

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
