"""
MySQL schema documenter: catalog queries, schema aggregation and html pages
"""

__version__ = '0.1.0'

from .aggregator import SchemaAggregator, parse_param_list
from .catalog import CatalogConnection, CatalogQueries
from .documenter import MySQLDocumenter
from .models import FieldSchema, IndexSchema, ParamSchema, ProcedureSchema, TableSchema

__all__ = [
    'SchemaAggregator',
    'parse_param_list',
    'CatalogConnection',
    'CatalogQueries',
    'MySQLDocumenter',
    'FieldSchema',
    'IndexSchema',
    'ParamSchema',
    'ProcedureSchema',
    'TableSchema',
]
