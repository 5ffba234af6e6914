"""
Bar input and rolling history module.

Validates host bar arguments and keeps the bounded price/return series.
"""
