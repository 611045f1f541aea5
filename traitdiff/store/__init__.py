"""Report and canonical document output."""

from .output import ReportRenderer, render_canonical_document

__all__ = ["ReportRenderer", "render_canonical_document"]
