"""
Pointer interaction and animation scheduling.

Clicks zoom (left in, right out) toward the cursor by moving the camera
targets and starting the animation; drags pan immediately. While the
animation runs, every tick eases the camera and requests a frame. The
timer stops on the first tick that finds the camera settled and the
surface already rendering or showing that exact view, so a request
dropped behind a pass in flight is made up on a later tick.

All methods run on the UI thread.
"""

from .timer import FrameTimer


LEFT = 1
RIGHT = 3


class InteractionController:
    """
    Maps pointer events to camera updates.

    Args:
        camera: Camera to drive
        request_render: Called whenever a new frame is needed
        size: Callable returning the canvas (width, height)
        scheduler_factory: scheduler_factory(callback, period_ms) -> timer
            with start(), stop() and running
        period_ms: Animation tick period
        is_current: Callable telling whether a frame for the camera's
            current view was accepted (default: always true)
    """

    def __init__(self, camera, request_render, size, scheduler_factory=FrameTimer,
                 period_ms=10, is_current=None):
        self.camera = camera
        self.request_render = request_render
        self.size = size
        self.is_current = is_current or (lambda: True)
        self.timer = scheduler_factory(self.tick, period_ms)
        self.anchor = None

    @property
    def animating(self):
        return self.timer.running

    def start_animation(self):
        if not self.timer.running:
            self.timer.start()

    def tick(self):
        """One animation step: render if moved or stale, else go idle."""
        if self.camera.tick() or not self.is_current():
            self.request_render()
        else:
            self.timer.stop()

    def press(self, x, y, button=LEFT):
        self.anchor = (x, y)

    def release(self, x=None, y=None, button=LEFT):
        self.anchor = None

    def click(self, x, y, button=LEFT):
        """Zoom toward (x, y): in on LEFT, out on RIGHT."""
        self.anchor = None
        if button not in (LEFT, RIGHT):
            return
        width, height = self.size()
        self.camera.zoom_at(x, y, width, height, zoom_in=button == LEFT)
        self.start_animation()

    def drag(self, x, y):
        """Pan by the motion since the last drag point."""
        if self.anchor is None:
            self.anchor = (x, y)
            return
        dx = x - self.anchor[0]
        dy = y - self.anchor[1]
        self.anchor = (x, y)
        if dx == 0 and dy == 0:
            return
        self.camera.pan(dx, dy)
        self.request_render()
        self.start_animation()
