"""CLI commands for todolist."""
