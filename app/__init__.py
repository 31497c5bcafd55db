"""HTTP boundary for the Code Complexity Analyzer."""

__version__ = "2.1.0"
