"""
Analysis package for the Resource Usage & Deadlock Analyzer.
Contains the engine entry point and its result type.
"""
