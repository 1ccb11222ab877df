"""
Test suites package.

This repository keeps `testsuites` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - CI/CD module imports

All content is demo-safe and does not include production secrets.
"""
