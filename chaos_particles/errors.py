class ConfigurationError(ValueError):
    """Raised for bad setup values, before the simulation starts running."""
