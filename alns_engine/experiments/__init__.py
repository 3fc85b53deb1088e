"""Experiment runners for repeated ALNS trajectories."""
