"""HTML rendering and PDF export."""

from .pdf import BrowserSession, PdfRenderer
from .renderer import ResumeContext, ResumeRenderer

__all__ = ["BrowserSession", "PdfRenderer", "ResumeContext", "ResumeRenderer"]
