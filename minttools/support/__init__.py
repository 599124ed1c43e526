"""
Support code: exception types, interfaces, and source-text error reporting.
"""
