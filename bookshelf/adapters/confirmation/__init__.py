"""Confirmation adapters for destructive catalog operations.

- prompt: Ask on the terminal and wait for an answer
- auto: Fixed answer, for scripted runs and assume-yes mode
"""
