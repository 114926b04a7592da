"""
Admissions outcome ingestion.

Crawls an archive of community admissions-results posts, extracts one
outcome per (post, school) and stores them against canonical schools.
"""

__version__ = "0.1.0"
