"""
Vanderscope: Van der Pol phase-space sonifier.

Integrates the oscillator, draws its trajectory and turns upward
zero-crossings of x into synthesized notes.
"""

__version__ = "0.1.0"
