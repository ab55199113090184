"""
Reporting adapters for engine results.

Modules
-------
export      Flatten engine results into flat row dicts for the export layer.
formatters  ASCII tables for CLI output.
"""
