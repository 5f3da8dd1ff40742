"""
Core Package

Models, geometry and utilities shared by the theme plugins and the
builder. Nothing in here draws on a canvas.
"""
