"""
Lab Autograder

Grades HTML/CSS lab submissions against a declarative rubric and produces
a numeric score, per-item feedback, and a CSV grade record.
"""

__version__ = "0.1.0"
