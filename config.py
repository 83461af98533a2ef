# Configuration values for the table canvas.

WINDOW_TITLE = "Table Canvas"

WINDOW_DEFAULT_SIZE = (800, 600)
WINDOW_MIN_SIZE = (400, 200)

# Frame budget, ~60 fps
FRAME_MS = 16

TOP_BAR_HEIGHT = 55
VIEWPORT_SIDE_MARGIN = 10
VIEWPORT_VERTICAL_MARGIN = 5
VIEWPORT_ORIGIN = (10, 55)

# Extra space that can be seen after the right-most / bottom-most panel
VIEWPORT_RIGHT_SCROLL_MARGIN = 100
VIEWPORT_BOTTOM_SCROLL_MARGIN = 50

# Height of the horizontal bar and width of the vertical bar
SCROLLBAR_DIM = 10
SCROLLBAR_DISPLAY_MS = 1000
SCROLL_SPEED = 10

MAX_PANELS = 36

PANEL_DEFAULT_SIZE = (150, 100)
PANEL_PLACEMENT_GAP = 10
PANEL_GRID_SIZE = 3
GRAB_HANDLE_SIZE = 10
DEFAULT_CELL_VALUE = ""

# Horizontal cell text margin as a proportion of cell width
CELL_TEXT_MARGIN = 0.05

ADD_BUTTON_RECT = (10, 10, 35, 25)
ADD_BUTTON_LABEL = "Add Table"
BUTTON_PRESS_FLASH_MS = 200
# Inset of the button glyph as a proportion of the button size
BUTTON_GLYPH_INSET = 0.2

# tkinter mouse button numbers
BUTTON_LEFT = 1
BUTTON_RIGHT = 3

# tkinter keysyms
QUIT_KEY = "q"
EDIT_KEY = "Return"
KEY_UP = "Up"
KEY_DOWN = "Down"
KEY_LEFT = "Left"
KEY_RIGHT = "Right"

FONT = ("Lato", 10)

# Colors are hex strings or RGBA tuples (0-255); translucent ones are
# blended over THEME["bg"] when drawn.
THEME = {
    "bg": "#FFFFFF",
    "frame": "#000000",
    "text": "#000000",
    "grid": "#000000",
    "active_cell": (96, 96, 96, 172),
    "scrollbar": (96, 96, 96, 172),
    "grab_handle": "#000080",
    "button": "#FFFFFF",
    "button_hover": "#808080",
    "button_active": "#404040",
    "button_glyph": "#000000",
    "button_glyph_active": "#FFFFFF",
}

LOG_DIR_ENV = "TABLECANVAS_LOG_DIR"
LOG_DIR_NAME = "TableCanvas"
LOG_FILE = "table-canvas.log"
LOG_RETENTION = 5
LOG_MAX_BYTES = 512 * 1024
