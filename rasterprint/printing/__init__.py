from .job import DEFAULT_DOT_WIDTH, DEFAULT_FEED_LINES, PrintJobBuilder, PrintSettings, print_capture

__all__ = ["DEFAULT_DOT_WIDTH", "DEFAULT_FEED_LINES", "PrintJobBuilder", "PrintSettings", "print_capture"]
