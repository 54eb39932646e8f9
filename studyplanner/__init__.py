"""
Study Planner.

- backend/: Notes and grade records API, database, configuration
"""
