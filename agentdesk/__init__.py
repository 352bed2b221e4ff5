"""Author, browse and run agent definition files for the claude command line."""

__version__ = "0.1.0"
