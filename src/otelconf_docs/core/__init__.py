"""Run context, logging and structured-data helpers shared by all commands."""
