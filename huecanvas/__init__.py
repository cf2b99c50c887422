# HueCanvas: every colour of a 32-level RGB grid, one pixel each, Hue-sorted

from .palette import Color, generate_palette
from .painters import paint
from .render import render, save_png, RenderResult

__all__ = ["Color", "generate_palette", "paint", "render", "save_png", "RenderResult"]
