"""AetherNav — policy-gated navigation decision service."""

__version__ = "0.1.0"
