"""Program identity shown in diagnostics, usage, and ``--version``."""

PROGRAM_NAME = "pdir"
PROGRAM_VERSION = "0.1"
PROGRAM_AUTHOR = "LeavaTail"
COPYRIGHT_YEAR = "2019"
