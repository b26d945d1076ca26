"""Vehicle lifecycle and settlement engine for a used-car resale business."""

__version__ = "0.1.0"
