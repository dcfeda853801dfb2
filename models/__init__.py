"""
Models package for the Resource Usage & Deadlock Analyzer.
Contains resource kinds, consumers and the input snapshot.
"""
