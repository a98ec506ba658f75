"""
Provisioning errors — every fatal condition of the workflow.

Any ProvisionError aborts the whole run. Nothing is retried and
nothing already done is undone; the CLI prints the message under an
``[ERROR]`` tag and exits non-zero.
"""

from __future__ import annotations

from provisioner.core.models.action import Receipt


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""

    exit_code = 1


class DependencyError(ProvisionError):
    """A required tool is missing or too old and was not remediated."""


class AbortedByUser(DependencyError):
    """The operator declined a step the workflow cannot do without."""


class InputError(ProvisionError):
    """An operator-supplied or configured value is empty or malformed."""


class ExternalToolError(ProvisionError):
    """An invoked installer, downloader, extractor or build step failed."""

    def __init__(self, message: str, receipt: Receipt | None = None):
        super().__init__(message)
        self.receipt = receipt


class BundleStructureError(ProvisionError):
    """The downloaded archive does not have the expected layout."""
