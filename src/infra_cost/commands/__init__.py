"""Command modules for the infra-cost CLI."""
