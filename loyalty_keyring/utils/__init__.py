from .barcode import frame_for_render, CODABAR

__all__ = ["frame_for_render", "CODABAR"]
