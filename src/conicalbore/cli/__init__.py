"""Command-line entry points (console script: conicalbore)."""
