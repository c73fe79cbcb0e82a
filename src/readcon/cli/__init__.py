"""readcon command-line interface (typer)."""
