"""Configuration Constants

Default page geometry, palette, typography and fixed report content.
All lengths are in PDF points (1/72 inch).
"""
from reportlab.lib.pagesizes import A4

# Page Geometry
PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN_TOP = 50.0
MARGIN_BOTTOM = 40.0
MARGIN_LEFT = 50.0
MARGIN_RIGHT = 50.0
FOOTER_HEIGHT = 30.0  # Reserved below the content area on every page

# Font Sizes (points)
DEFAULT_FONT_SIZES = {
    "title": 24,
    "subtitle": 18,
    "heading": 16,
    "subheading": 14,
    "body": 12,
    "small": 10,
    "tiny": 8,
}

LINE_SPACING = 1.25  # Leading as a multiple of font size

# Color Palette (hex)
DEFAULT_COLORS = {
    "navy": "#1C3062",
    "blue": "#4A90E2",
    "light_blue": "#7FDBFF",
    "gold": "#FFD700",
    "white": "#FFFFFF",
    "light_gray": "#F8F9FA",
    "dark_gray": "#343A40",
    "black": "#000000",
    "hit": "#00CC00",
    "miss": "#FF0000",
    "table_border": "#343A40",
    "placeholder_fill": "#F5F5F5",
    "placeholder_border": "#C8C8C8",
}

# Text style presets keyed by role: font size name, weight, color name, space after
DEFAULT_TEXT_STYLES = {
    "title": {"size": "title", "bold": True, "color": "navy", "space_after": 4},
    "subtitle": {"size": "subtitle", "bold": False, "color": "navy", "space_after": 18},
    "heading": {"size": "heading", "bold": True, "color": "navy", "space_after": 8},
    "subheading": {"size": "subheading", "bold": True, "color": "navy", "space_after": 4},
    "body": {"size": "body", "bold": False, "color": "dark_gray", "space_after": 2},
    "small": {"size": "small", "bold": False, "color": "dark_gray", "space_after": 0},
    "link": {"size": "body", "bold": False, "color": "blue", "space_after": 2},
}

# Shot Table
SHOT_TABLE_COLUMNS = ["SHOT NUMBER", "SPEED", "ALTITUDE", "DISTANCE", "TARGET HIT"]
SHOT_TABLE_COLUMN_WIDTHS = [99.0, 99.0, 99.0, 99.0, 99.0]
SHOT_TABLE_STATUS_COLUMN = 4
SHOT_TABLE_ROW_HEIGHT = 22.0
HIT_LABELS = ("YES", "NO")

# Block Sizes
SECTION_HEADER_HEIGHT = 34.0
CARD_GAP = 15.0
CARD_TITLE_BAR_HEIGHT = 20.0
CARD_PADDING = 8.0
CHART_MAX_HEIGHT = 300.0
PHOTO_MAX_WIDTH = 200.0
PHOTO_MAX_HEIGHT = 250.0
PLACEHOLDER_HEIGHT = 50.0
BLOCK_SPACING = 12.0

# Branding
BRAND_NAME = "ARESIA"
REPORT_TITLE = "Virtual Air Combat Engagement"
REPORT_SUBTITLE = "Simulator for live fire training"
REPORT_HEADING = "Training Simulation Report"
ROUND_CAPTION = "Training Simulation Report - Shots Details"
FILENAME_PREFIX = "Mission_Report"

# Trailing informational pages: title, subtitle lines, then (heading, lines) groups.
# A group may name a third element, the text style role of its lines (default "body")
INFO_PAGES = [
    {
        "title": "Virtual Air Combat Engagement",
        "subtitle": [
            "Simulator for",
            "Air-to-Air & Air-to-Ground",
            "Live Fire Training",
        ],
        "sections": [
            ("SIMULATOR STATION", [
                "Virtual Reality Helmet",
                "Joystick - Throttle - Rudder",
                "Immersive environment",
                "Real targets with 3D models",
            ]),
            ("INSTRUCTOR STATION", [
                "Remote mission control",
                "Mission Replay and Analysis",
                "Record Mission / Pilot data",
                "Virtual Instructor",
            ]),
            ("PRODUCT", [
                "- Possibility to customize missions and aircraft",
                "- Real Time Data Fusion (Trajectory, Eye Tracking, Hand Tracking, Stress Sensors ...)",
                "- Multi pilots Training",
                "- Real time Evaluation",
                "- Radio Communication Training",
                "- Voice Recognition / Synthesis",
            ]),
        ],
    },
    {
        "title": "Virtual Air Combat Engagement",
        "subtitle": ["Simulator for live fire training"],
        "sections": [
            ("VIDEO", [
                "https://drive.google.com/file/d/1igE4wHErNEPPeFQGWXQXLpCjBrYCKJYa/view",
            ], "link"),
            ("CONTACT", [
                f"{BRAND_NAME} OZOIR",
                "Address: 11 avenue Henri Beaudelet",
                "77330 Ozoir-la-Ferrière - FRANCE",
            ]),
        ],
    },
]
