"""Command-line interface for rapprochement."""
