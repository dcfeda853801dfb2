"""
Utilities package for the Resource Usage & Deadlock Analyzer.
Contains input loading, report rendering and logging.
"""
