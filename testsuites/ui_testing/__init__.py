"""Browser UI automation: framework core, page objects and UI tests."""
