"""Exception types raised by the volume-scan pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class InputError(PipelineError, ValueError):
    """A request or scan carried a value the pipeline cannot process."""


class NoCandidatesError(InputError):
    """No scan identifiers were available to choose from."""


class ScanIdentifierError(InputError):
    """A scan identifier did not carry a parseable ``HHMMSS`` time field."""


class UnsupportedWordSizeError(InputError):
    """A data moment used a gate word size other than 8 bits."""


class InvalidStrideError(InputError):
    """A decimation stride was zero or negative."""


class UpstreamError(PipelineError):
    """Listing, fetching or decoding a scan failed in an external collaborator."""


class ReentrancyError(PipelineError, RuntimeError):
    """A pipeline run was requested while another run was in progress."""
