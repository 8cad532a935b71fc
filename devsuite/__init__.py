"""
GitHub DevSuite: repository health scoring and issue label suggestions.
"""

__version__ = "1.0.0"
