DEFAULT_DTYPE = "float64"  # dtype of dense and scipy exports

class EntryColumn:
    ROW = "row"
    COL = "col"
    VALUE = "value"

    ALL = [ROW, COL, VALUE]
