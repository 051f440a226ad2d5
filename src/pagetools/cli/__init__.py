"""pagetools command-line interface (Typer)."""
