"""Drawing surface, frame loop and on-screen controls."""

from vanderscope.render.canvas import CanvasConfig, PhaseCanvas
from vanderscope.render.loop import FrameLoop, LoopConfig, substeps
