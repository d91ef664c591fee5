"""A unified, simplified interface for Snowflake query results"""
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Type, TypeVar

import pandas as pd
from pydantic import BaseModel

Record = dict[str, Any]
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class QueryResult:
    """Rows of one statement, as records keyed by the warehouse column names"""
    columns: list[str] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)
    query_id: Optional[str] = None

    @classmethod
    def from_cursor(cls, cursor: Any) -> "QueryResult":
        """Drain an executed cursor; column names are kept exactly as reported"""
        description = cursor.description or []
        columns = [desc[0] for desc in description]
        rows = cursor.fetchall() if description else []
        records = [dict(zip(columns, row)) for row in rows or []]
        return cls(columns=columns, records=records, query_id=getattr(cursor, "sfqid", None))

    @property
    def rowcount(self) -> int:
        """The number of rows returned"""
        return len(self.records)

    def as_models(self, model: Type[M]) -> list[M]:
        """Validate each record into an instance of `model`"""
        return [model.model_validate(record) for record in self.records]

    def to_df(self, lowercase_columns: bool = False) -> pd.DataFrame:
        """All records as a DataFrame with optional column casing"""
        df = pd.DataFrame.from_records(self.records, columns=self.columns)
        if lowercase_columns and len(df.columns) > 0:
            df.columns = df.columns.str.lower()
        return df

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        """String representation"""
        return (
            f"QueryResult(query_id='{self.query_id}', "
            f"rowcount={self.rowcount})"
        )
