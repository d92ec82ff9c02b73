"""
Schema aggregation
------------------
Folds the raw catalog rows into the table and procedure models.

Rows are ingested in a fixed order: tables, columns, indexes, procedures,
procedure parameters. Columns, indexes and parameters only attach to
entries created by an earlier step; rows naming an unknown table or
procedure are dropped.
"""
import re
from typing import Any, Dict, Iterable, List, Mapping, Union

from .models import NOT_AVAILABLE, FieldSchema, IndexSchema, ParamSchema, ProcedureSchema, TableSchema

NEWLINES = re.compile(r'[\r\n]+')
WHITESPACE = re.compile(r'\s+')

Row = Mapping[str, Any]


def parse_param_list(param_list: Union[str, bytes, None]) -> List[ParamSchema]:
    """
    Parse a routine's free-text parameter list

    Args:
        param_list: Comma separated parameters, each `[direction] name type`

    Returns:
        The parameters in declaration order. A parameter without a direction
        gets 'n/a'; empty entries (empty list, trailing comma) are skipped.
    """
    if param_list is None:
        return []
    if isinstance(param_list, (bytes, bytearray)):
        param_list = param_list.decode('utf-8', errors='replace')

    params = []
    for candidate in NEWLINES.sub('', str(param_list)).split(','):
        candidate = candidate.strip()
        if not candidate:
            continue

        tokens = WHITESPACE.split(candidate)
        if len(tokens) < 3:
            tokens.insert(0, NOT_AVAILABLE)
        tokens += [''] * (3 - len(tokens))

        params.append(ParamSchema(
            direction=tokens[0],
            name=tokens[1],
            type=tokens[2]
        ))

    return params


class SchemaAggregator:
    """Builds the table and procedure models of one documentation run"""

    def __init__(self):
        self.tables: Dict[str, TableSchema] = {}
        self.procedures: Dict[str, ProcedureSchema] = {}

    def ingest_tables(self, rows: Iterable[Row]) -> 'SchemaAggregator':
        for row in rows:
            self.tables[row['TABLE_NAME']] = TableSchema(
                engine=row.get('ENGINE'),
                create_time=row.get('CREATE_TIME'),
                collation=row.get('TABLE_COLLATION'),
                comment=row.get('TABLE_COMMENT')
            )
        return self

    def ingest_columns(self, rows: Iterable[Row]) -> 'SchemaAggregator':
        for row in rows:
            table = self.tables.get(row['TABLE_NAME'])
            if table is None:
                continue

            table.fields[row['COLUMN_NAME']] = FieldSchema(
                position=row.get('ORDINAL_POSITION'),
                field_default=row.get('COLUMN_DEFAULT'),
                nullable=row.get('IS_NULLABLE'),
                char_max_length=row.get('CHARACTER_MAXIMUM_LENGTH'),
                collation=row.get('COLLATION_NAME'),
                field_type=row.get('COLUMN_TYPE'),
                field_key=row.get('COLUMN_KEY') or '',
                extra=row.get('EXTRA') or '',
                comment=row.get('COLUMN_COMMENT') or ''
            )
        return self

    def ingest_indexes(self, rows: Iterable[Row]) -> 'SchemaAggregator':
        for row in rows:
            table = self.tables.get(row['TABLE_NAME'])
            if table is None:
                continue

            table.indexes[row['INDEX_NAME']] = IndexSchema(columns=row.get('COLUMNS'))
        return self

    def ingest_procedures(self, rows: Iterable[Row]) -> 'SchemaAggregator':
        for row in rows:
            self.procedures[row['ROUTINE_NAME']] = ProcedureSchema(
                create_time=row.get('CREATED'),
                collation=row.get('COLLATION_CONNECTION'),
                comment=row.get('ROUTINE_COMMENT')
            )
        return self

    def ingest_procedure_params(self, rows: Iterable[Row]) -> 'SchemaAggregator':
        for row in rows:
            procedure = self.procedures.get(row['NAME'])
            if procedure is None:
                continue

            procedure.params.extend(parse_param_list(row.get('PARAM_LIST')))
        return self
