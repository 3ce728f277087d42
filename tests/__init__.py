"""BIBLION test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Components wired together through the bootstrap.
- functional/   : User-visible flows exercised through the CLI.
- contract/     : Shared behavior/invariants enforced across multiple implementations.

General guidance
- Every test supplies its own dates; nothing depends on the wall clock.
- Prefer fakes over mocks at boundaries.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers for the folders above are applied automatically by tests/conftest.py.
"""
