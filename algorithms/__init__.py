"""
Algorithms package for the Resource Usage & Deadlock Analyzer.
Contains the resource ledger, deadlock detection, safety analysis and recovery advice.
"""
