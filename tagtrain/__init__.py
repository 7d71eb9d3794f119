"""tagtrain: alpha/stable release train for versioned crates."""

__version__ = "0.1.0"
