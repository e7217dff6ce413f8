"""gmlview - Interactive viewer for GraphML-style graph documents.

gmlview parses graph-description markup into an immutable model, lays it out
with named algorithms and keeps the rendered scene in sync with the document
as it changes.
"""

__version__ = "0.1.0"
__author__ = "gmlview contributors"
__description__ = "Interactive viewer for GraphML-style graph documents"

from gmlview.config import GmlviewConfig
from gmlview.session import ViewerSession

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "GmlviewConfig",
    "ViewerSession",
]
