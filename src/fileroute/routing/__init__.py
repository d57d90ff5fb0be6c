"""Routing — handler discovery, cached route table, first-match-wins matching.

Routes are discovered once at startup and held in an immutable table
for the life of the process.
"""
