"""Game-data CSV -> JSON converter.

Package structure:

csv2json/
├── transform/   # per-row pipeline: coercion, dot-notation, field rules
├── tabular/     # CSV reading (pandas)
├── services/    # batch orchestration, progress, SUMMARY line
├── models/      # dataclasses for files, rows, results, error records
├── config/      # YAML config + JSON schema + env overrides
├── logging/     # labeled console logging and the JSON Lines error log
└── cli/         # command line entry point
"""

__version__ = "0.1.0"
