STATE_DIR_NAME = ".todo_graph"
CONFIG_FILE = "config.yaml"

# Layout spacing, fixed for every render.
COLUMN_SPACING = 200
COLUMN_OFFSET = 200
LAYER_SPACING = 200
LAYER_OFFSET = 300

EDGE_VISUAL_TYPE = "NORMAL"

CYCLE_GUARD_REACHABILITY = "reachability"
CYCLE_GUARD_LEGACY = "legacy"
CYCLE_GUARD_MODES = {CYCLE_GUARD_REACHABILITY, CYCLE_GUARD_LEGACY}
DEFAULT_CYCLE_GUARD_MODE = CYCLE_GUARD_REACHABILITY

DEFAULT_LOG_LEVEL = "INFO"
