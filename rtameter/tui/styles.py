"""Textual CSS styles for the RTA meter demo."""

APP_CSS = """
Screen {
    background: $surface;
}

#meter-body {
    width: 100%;
    height: 1fr;
    padding: 0 1;
}

#rta-meter {
    width: 100%;
    height: 1fr;
}

#meter-status {
    dock: bottom;
    height: 1;
    width: 100%;
    background: $primary-background;
    color: $text-muted;
    padding: 0 1;
}
"""
