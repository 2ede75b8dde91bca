from tagmap.core.operation import (
    clear,
    put,
    remove,
    replace,
)

SCHEMA = {
    **clear.SCHEMA,
    **put.SCHEMA,
    **remove.SCHEMA,
    **replace.SCHEMA,
}
