"""
Integration tests that run the real toktx encoder.

These tests:
- Require KTX-Software's toktx on PATH (or TOKTX_PATH set)
- Are skipped automatically when toktx is not installed

Run with:
    pytest tests/integration/ -v
"""
