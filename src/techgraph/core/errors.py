"""
Error taxonomy.

- FatalLoadError: the dataset is missing or malformed. Initialization aborts.
- ReferentialIntegrityError: one edge or node is inconsistent with the rest
  of the dataset. The item is dropped and loading continues.
- InteractionError: a single event handler failed. Logged at the handler
  boundary; state is left as it was before the event.
"""


class TechGraphError(Exception):
    """Base class for all techgraph errors."""


class FatalLoadError(TechGraphError):
    """Dataset could not be loaded or failed shape validation."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class ReferentialIntegrityError(TechGraphError):
    """An edge or node references something that does not exist."""

    def __init__(self, message: str, item_id: str):
        self.item_id = item_id
        super().__init__(message)


class InteractionError(TechGraphError):
    """A user interaction could not be applied."""
