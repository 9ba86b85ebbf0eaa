"""
LPPM research portal API.
"""
