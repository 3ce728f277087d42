"""Bootstrap (composition root) for BIBLION.

Assembles the application at runtime: wires the in-memory ledgers and an ID
generator into the library service, injects the service into the command
handlers and composes the message bus.

Import rules:
- Entry points get their wiring from *this* package and never construct
  adapters themselves.
- This package may import: `biblion.adapters`, `biblion.service_layer`,
  `biblion.interfaces`, `biblion.domain`, and `biblion.config`.
- Inner layers must not import `biblion.bootstrap`.

No business rules live here; this is assembly only.
"""

from .bootstrap import ID_GENERATOR_KINDS, AppContainer, bootstrap, build_id_generator

__all__ = ["ID_GENERATOR_KINDS", "AppContainer", "bootstrap", "build_id_generator"]
