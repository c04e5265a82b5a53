"""Application wiring: settings and command-line entry point."""
