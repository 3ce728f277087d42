"""BIBLION command-line interface."""
