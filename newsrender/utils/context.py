"""
Threaded render context for newsrender.
"""
import web

from newsrender.core.model import CaptureLevel

# Placeholder for keeping context defaults.
defaults = web.storage(
    current_page=None,
    current_node=None,
    capture_level=CaptureLevel.BODY,
    page_index=None,
)


class RenderContext(web.ThreadedDict):
    """
    Thread-specific state of the render pass in progress: the page being
    captured, the node being rendered and the capture level.
    """

    def load(self, **kw):
        self.update(defaults)
        self.update(kw)

    def __getattr__(self, name):
        # only called when the attribute is not set for this thread
        return getattr(defaults, name)


context = RenderContext()
