"""
Database engine, sessions and pagination.
"""
