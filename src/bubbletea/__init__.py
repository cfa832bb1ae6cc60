"""Bubble Tea: a 3D cup of layered, blendable liquids."""
