"""enclave-fit: offline fitness planner with strength, training and nutrition evaluation."""

__version__ = "0.1.0"
