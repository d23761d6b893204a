"""
Interactive widgets of the rendered homepage.

The browser drives the actual timers; this module pins down their timing
contracts as small state machines and stamps every slider/carousel found
in the rendered markup with the attributes the page script reads.
"""
import logging

logger = logging.getLogger(__name__)

SLIDER_INTERVAL_MS = 3000
CAROUSEL_INTERVAL_MS = 3000
CAROUSEL_STEP_RATIO = 0.8
CAROUSEL_WRAP_THRESHOLD_PX = 10


class HeroSlider:
    """Advances one slide per interval; manual navigation restarts the timer"""

    def __init__(self, slide_count, interval_ms=SLIDER_INTERVAL_MS, autoplay=True):
        self.slide_count = slide_count
        self.interval_ms = interval_ms or SLIDER_INTERVAL_MS
        self.autoplay = autoplay
        self.current = 0
        self.elapsed_ms = 0

    @property
    def autoplay_active(self):
        return self.autoplay and self.slide_count > 1

    @property
    def offset_percent(self):
        """translateX offset of the slide track"""
        return -100 * self.current

    def go_to(self, index):
        if self.slide_count:
            self.current = index % self.slide_count
        self.elapsed_ms = 0
        return self.current

    def next(self):
        return self.go_to(self.current + 1)

    def prev(self):
        return self.go_to(self.current - 1)

    def tick(self, ms):
        if not self.autoplay_active:
            return self.current
        self.elapsed_ms += ms
        while self.elapsed_ms >= self.interval_ms:
            self.elapsed_ms -= self.interval_ms
            self.current = (self.current + 1) % self.slide_count
        return self.current


class ProductCarousel:
    """
    Horizontal product strip that scrolls itself.

    Each step moves 80% of the visible width; within 10px of the end it
    jumps back to the start. Autoplay runs only when the content overflows
    and pauses while the pointer hovers the carousel.
    """

    def __init__(self, offset_width, scroll_width, interval_ms=CAROUSEL_INTERVAL_MS):
        self.offset_width = offset_width
        self.scroll_width = scroll_width
        self.interval_ms = interval_ms
        self.scroll_left = 0
        self.hovered = False
        self.elapsed_ms = 0

    @property
    def max_scroll(self):
        return max(0, self.scroll_width - self.offset_width)

    @property
    def step(self):
        return self.offset_width * CAROUSEL_STEP_RATIO

    @property
    def autoplay_active(self):
        return self.scroll_width > self.offset_width and not self.hovered

    def _advance(self):
        if self.scroll_left >= self.max_scroll - CAROUSEL_WRAP_THRESHOLD_PX:
            self.scroll_left = 0
        else:
            self.scroll_left = min(self.scroll_left + self.step, self.max_scroll)
        return self.scroll_left

    def scroll_next(self):
        self.elapsed_ms = 0
        return self._advance()

    def scroll_prev(self):
        self.elapsed_ms = 0
        self.scroll_left = max(0, self.scroll_left - self.step)
        return self.scroll_left

    def pointer_enter(self):
        self.hovered = True
        self.elapsed_ms = 0

    def pointer_leave(self):
        self.hovered = False
        self.elapsed_ms = 0

    def tick(self, ms):
        if not self.autoplay_active:
            return self.scroll_left
        self.elapsed_ms += ms
        while self.elapsed_ms >= self.interval_ms:
            self.elapsed_ms -= self.interval_ms
            self._advance()
        return self.scroll_left


def initialize_widgets(container):
    """
    Stamp sliders and carousels under a BeautifulSoup container.

    Returns the HeroSlider models of the sliders found, in page order.
    """
    sliders = []
    for element in container.select('.hero-slider'):
        autoplay = element.get('data-autoplay', 'true') in ('true', '')
        try:
            interval = int(element.get('data-autoplay-interval') or SLIDER_INTERVAL_MS)
        except ValueError:
            interval = SLIDER_INTERVAL_MS
        slide_count = len(element.select('.hero-slide'))
        slider = HeroSlider(slide_count, interval, autoplay)
        element['data-autoplay'] = 'true' if slider.autoplay_active else 'false'
        element['data-autoplay-interval'] = str(slider.interval_ms)
        sliders.append(slider)

    carousels = container.select('.product-carousel')
    for element in carousels:
        element['data-autoscroll-interval'] = str(CAROUSEL_INTERVAL_MS)
        element['data-wrap-threshold'] = str(CAROUSEL_WRAP_THRESHOLD_PX)
        element['data-pause-on-hover'] = 'true'

    logger.debug(f"Initialized {len(sliders)} hero slider(s) and {len(carousels)} carousel(s)")
    return sliders
