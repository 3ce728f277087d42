"""Service layer for BIBLION.

Hosts the library service, the commands it understands and the message bus
routing commands to their handlers.
"""
