"""
Test Package

Contains unit tests for all modules.
Run with: pytest tests/ -v

Test files follow the pattern:
    test_<module_name>.py

Example:
    tests/test_schema.py      - Tests for tonal_harmony/data/schema.py
    tests/test_numerals.py    - Tests for tonal_harmony/rules/numerals.py
    tests/test_engine.py      - Tests for tonal_harmony/app/engine.py

Golden data lives in tests/fixtures/.
"""
