"""Order use-cases."""
