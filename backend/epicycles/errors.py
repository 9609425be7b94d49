"""Error taxonomy shared by the engine, the media collaborators and the API."""

from __future__ import annotations


class EpicyclesError(Exception):
    """Base class for every error raised or reported by this package."""


class InputError(EpicyclesError):
    """Empty or degenerate sample sequence."""


class StateError(EpicyclesError):
    """Operation requested in a lifecycle state that does not allow it."""


class ResourceError(EpicyclesError):
    """An external collaborator (image loader, encoder) failed."""
