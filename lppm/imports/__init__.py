"""
Spreadsheet importers.
"""
