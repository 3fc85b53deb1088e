"""Matplotlib plots of ALNS results."""
