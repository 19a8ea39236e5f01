"""Package initialization for xray-jaeger-mapper.

Converts AWS X-Ray trace documents into the process/span model used by
Jaeger-style trace views.
"""

from .document import TraceDocumentError
from .mapper import map_trace_document, transform_trace_response
from .mapping.segment_walker import MalformedTraceError

__version__ = "0.1.0"

__all__ = [
    "transform_trace_response",
    "map_trace_document",
    "TraceDocumentError",
    "MalformedTraceError",
]
