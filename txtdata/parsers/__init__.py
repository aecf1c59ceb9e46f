"""
Parsers sub-package for txtdata.

Pure building blocks with no I/O and no exceptions for malformed input:

- numbers.py: ``parse_int`` (bounded integers), ``parse_fixed6_fraction``
  (decimal fraction to 1/64 steps) and the ``Fixed6`` value type.
- header.py: ``build_columns`` reduces a header row to per-column skip
  lengths against a closed ``enum.Enum`` schema.

The loading layer (``datafile.py``, ``record.py`` and the table loaders)
decides that a failed parse aborts the load.
"""
