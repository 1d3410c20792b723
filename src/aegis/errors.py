"""Error taxonomy.

Gate abstentions are never errors. These exceptions only signal malformed
input or invalid configuration.
"""


class AegisError(Exception):
    """Base class for all aegis errors."""


class InputError(AegisError, ValueError):
    """A feature sample or learner response that cannot be ingested.

    Raised before any buffer or smoother state is touched.
    """


class ConfigurationError(AegisError, ValueError):
    """Thresholds or windows outside their valid ranges."""
