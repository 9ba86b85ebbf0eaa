"""
Core configuration, security and response helpers.
"""
