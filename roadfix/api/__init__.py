"""
Roadfix Connect - HTTP API
"""
