# Checks and summaries of finished pixel buffers

from .metrics import saturation_and_hue, verify_pixel_buffer

__all__ = ["saturation_and_hue", "verify_pixel_buffer"]
