"""Side-effect free helpers shared by adapters."""
