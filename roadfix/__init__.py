"""
Roadfix Connect - community road hazard confirmations and contributor scoring.
"""

__version__ = "0.1.0"
