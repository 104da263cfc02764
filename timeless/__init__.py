"""
Timeless watch rental API
"""
