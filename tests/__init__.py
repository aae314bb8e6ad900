"""Test suite for the RCK client.

Test Structure:
- unit/: Unit tests per package (compute, image, api/http, utils)
- integration/: Public client against an in-process fake service
- conftest.py: Shared fixtures (recording backend, client factories)
"""
