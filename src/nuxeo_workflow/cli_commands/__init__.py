"""CLI command groups registered on the main typer app."""
