"""Domain layer for BIBLION.

Contains business rules: value objects, entities (copies, loans, penalties),
domain events and the domain error taxonomy. This package is deliberately
technology-agnostic.

Dependency rule: do not import from `biblion.adapters` or `biblion.entrypoints`.
"""
