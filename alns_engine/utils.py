import numpy as np


def create_rng(seed: int | None = None) -> np.random.Generator:
    """
    Create the random generator for one search run.

    Args:
        seed: Fixed seed for a reproducible stream, or None to seed from OS entropy

    Returns:
        A numpy Generator that is the single source of randomness for the run
    """
    return np.random.default_rng(seed)
