"""Concrete implementations of the ports in `biblion.interfaces`."""
