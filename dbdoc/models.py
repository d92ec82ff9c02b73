"""
Data models for the documented schema
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

NOT_AVAILABLE = 'n/a'


@dataclass
class FieldSchema:
    """A single table column"""
    position: int
    field_default: Optional[str]
    nullable: str
    char_max_length: Optional[int]
    collation: Optional[str]
    field_type: str
    field_key: str
    extra: str
    comment: str


@dataclass
class IndexSchema:
    """An index; columns are comma-joined in sequence-in-index order"""
    columns: str


@dataclass
class TableSchema:
    """A table with its columns and indexes, both keyed by name"""
    engine: Optional[str]
    create_time: Optional[Union[datetime, str]]
    collation: Optional[str]
    comment: Optional[str]
    fields: Dict[str, FieldSchema] = field(default_factory=dict)
    indexes: Dict[str, IndexSchema] = field(default_factory=dict)


@dataclass
class ParamSchema:
    """A stored routine parameter"""
    direction: str
    name: str
    type: str


@dataclass
class ProcedureSchema:
    """A stored routine and its parameters in declaration order"""
    create_time: Optional[Union[datetime, str]]
    collation: Optional[str]
    comment: Optional[str]
    params: List[ParamSchema] = field(default_factory=list)
