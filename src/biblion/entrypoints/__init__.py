"""Entry points for BIBLION (command-line interface)."""
