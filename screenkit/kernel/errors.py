"""
Screenkit Kernel — Errors

ConfigError        the document steps outside the closed type domain
CapabilityError    a platform capability failed while dispatching a CTA
MissingAssetWarning  non-fatal; an image section has no src
"""

from __future__ import annotations


class ConfigError(ValueError):
    """Document violates the closed type domain."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class CapabilityError(RuntimeError):
    """An external capability raised or reported failure during dispatch."""

    def __init__(self, capability: str, cause: BaseException | None = None) -> None:
        self.capability = capability
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{capability} capability failed{detail}")


class MissingAssetWarning(UserWarning):
    """Image section rendered without a src. Collected, never raised."""

    def __init__(self, section_id: str) -> None:
        self.section_id = section_id
        super().__init__(f"Image section '{section_id}' has no src; rendering placeholder")
