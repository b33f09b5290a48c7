GRID_SIZE = 4
INITIAL_PIECES = 9

# Pieces at this value never merge again; they can still slide into empty cells.
MAX_PIECE_VALUE = 6144

# Every refill deals these six low pieces plus a few bonus picks from the extras pool.
BASE_BAG_VALUES = (1, 1, 2, 2, 3, 3)
EXTRAS_PER_REFILL = 3

# Reaching a new maximum of at least this value adds a piece of value/ESCALATION_DIVISOR to the extras.
ESCALATION_THRESHOLD = 48
ESCALATION_DIVISOR = 8

# Quarter turns counterclockwise that bring each direction to "up".
DIRECTION_TURNS = {
    'up': 0,
    'left': 1,
    'down': 2,
    'right': 3,
}

# Terminal layout
CELL_WIDTH = 4
CELL_GAP = '   '
EMPTY_CELL = '--'
