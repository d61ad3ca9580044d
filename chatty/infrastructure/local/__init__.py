"""Local infrastructure implementations."""
