"""
QSignal App - Monte Carlo / Black-Scholes Signal Engine

A single-instrument trading signal engine. Simulates future prices under
Geometric Brownian Motion, values out-of-the-money options with
Black-Scholes and fuses both into a buy/sell/hold decision per bar, while
monitoring one open position against stop-loss and take-profit thresholds.
"""

__version__ = "0.1.0"
__author__ = "QSignal Team"
