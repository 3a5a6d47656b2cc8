from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class QueryResult:
    """Rows returned by an ad-hoc query.

    ``columns`` is the ordered result-set field list. SQL NULL is ``None`` in
    ``rows``, never an empty string. Statements without a result set (DDL,
    DML) produce empty ``columns`` and ``rows``.
    """

    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": list(self.columns), "rows": [dict(row) for row in self.rows]}
