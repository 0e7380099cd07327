from typing import Dict, List, Optional, Sequence

from dal.athena.errors import EmptyResultSet

Record = Dict[str, str]


def map_rows(rows: Sequence[Sequence[Optional[str]]]) -> List[Record]:
    """Convert a header row plus positional value rows into named records.

    The first row supplies the column names and is not returned. NULL or empty
    cells and cells missing from short rows become "". A repeated column name
    keeps the value of its last occurrence. Cells beyond the header width are
    dropped.
    """
    if not rows:
        raise EmptyResultSet()

    columns = [name or "" for name in rows[0]]
    records: List[Record] = []
    for row in rows[1:]:
        record: Record = {}
        for index, column in enumerate(columns):
            value = row[index] if index < len(row) else None
            record[column] = value or ""
        records.append(record)
    return records
