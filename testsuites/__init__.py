"""
Test suites package.

`testsuites` stays importable so that:
  - page objects and the UI framework can be imported by the tests
  - programmatic runners (e.g., `run_tests.py`) can reuse it
  - framework unit tests can share fakes via `testsuites.unit.fakes`

Credentials shipped in config are the public demo-site ones.
"""
