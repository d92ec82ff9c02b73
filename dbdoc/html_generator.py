"""
HTML rendering of the table and procedure models.
"""
import html
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .models import NOT_AVAILABLE, ProcedureSchema, TableSchema

DEFAULT_STYLE = """
        body {
            font-family: Arial, sans-serif;
            line-height: 1.6;
            margin: 0;
            padding: 20px;
            color: #333;
        }
        h1, h2, h3, h4 {
            color: #2c3e50;
        }
        h1 {
            border-bottom: 2px solid #eee;
            padding-bottom: 10px;
        }
        h2 {
            border-bottom: 1px solid #eee;
            padding-bottom: 5px;
            margin-top: 30px;
        }
        table {
            border-collapse: collapse;
            width: 100%;
            margin-bottom: 20px;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
        }
        th {
            background-color: #f2f2f2;
            font-weight: bold;
        }
        tr:nth-child(even) {
            background-color: #f9f9f9;
        }
        .toc {
            background-color: #f8f9fa;
            border: 1px solid #eaecef;
            border-radius: 3px;
            padding: 15px;
            margin-bottom: 20px;
        }
        .toc ul {
            list-style-type: none;
            padding-left: 20px;
        }
        .toc a {
            text-decoration: none;
            color: #007bff;
        }
        .toc a:hover {
            text-decoration: underline;
        }
        .section {
            margin-bottom: 30px;
        }
        .description {
            font-style: italic;
            color: #555;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
        }
"""


def _text(value: Any) -> str:
    """Escape a catalog value for an html cell; None renders empty"""
    if value is None:
        return ''
    if isinstance(value, datetime):
        value = value.strftime('%Y-%m-%d %H:%M:%S')
    elif isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8', errors='replace')
    return html.escape(str(value))


def _or_na(value: Any) -> str:
    return _text(value) if value else NOT_AVAILABLE


def _anchor(kind: str, name: str) -> str:
    return html.escape(f"{kind}-{name}", quote=True)


def _page_header(title: str, css: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
{css}
    </style>
</head>
<body>
    <div class="container">
        <h1>{title}</h1>
"""


def _table_of_contents(kind: str, names) -> str:
    items = ''.join(
        f'                <li><a href="#{_anchor(kind, name)}">{_text(name)}</a></li>\n'
        for name in names
    )
    return f"""
        <div class="toc">
            <h2>Table of Contents</h2>
            <ul>
{items}            </ul>
        </div>
"""


def _page_footer() -> str:
    return """
    </div>
</body>
</html>
"""


def render_tables_page(database_name: str, tables: Mapping[str, TableSchema],
                       css: Optional[str] = None) -> str:
    """Render the tables page: every table with its columns and indexes"""
    title = f"Tables: {_text(database_name)}"
    content = _page_header(title, DEFAULT_STYLE if css is None else css)
    content += _table_of_contents('table', tables)

    if not tables:
        content += "<p>No tables found.</p>"

    for table_name, table in tables.items():
        content += f"""
        <div class="section" id="{_anchor('table', table_name)}">
            <h2>{_text(table_name)}</h2>
"""
        if table.comment:
            content += f"""            <p class="description">{_text(table.comment)}</p>
"""
        content += f"""            <p><strong>Engine:</strong> {_text(table.engine)}
                <strong>Collation:</strong> {_text(table.collation)}
                <strong>Created:</strong> {_text(table.create_time)}</p>
            <h3>Columns</h3>
            <table>
                <tr>
                    <th>Name</th>
                    <th>Type</th>
                    <th>Collation</th>
                    <th>Nullable</th>
                    <th>Key</th>
                    <th>Default</th>
                    <th>Extra</th>
                    <th>Comment</th>
                </tr>
"""
        for field_name, field in table.fields.items():
            content += f"""                <tr>
                    <td>{_text(field_name)}</td>
                    <td>{_text(field.field_type)}</td>
                    <td>{_text(field.collation)}</td>
                    <td>{_text(field.nullable)}</td>
                    <td>{_text(field.field_key)}</td>
                    <td>{_text(field.field_default)}</td>
                    <td>{_text(field.extra)}</td>
                    <td>{_text(field.comment)}</td>
                </tr>
"""
        content += """            </table>
"""
        if table.indexes:
            content += """            <h3>Indexes</h3>
            <table>
                <tr>
                    <th>Name</th>
                    <th>Columns</th>
                </tr>
"""
            for index_name, index in table.indexes.items():
                content += f"""                <tr>
                    <td>{_text(index_name)}</td>
                    <td>{_text(index.columns)}</td>
                </tr>
"""
            content += """            </table>
"""
        content += """        </div>
"""

    return content + _page_footer()


def render_procedures_page(database_name: str, procedures: Mapping[str, ProcedureSchema],
                           css: Optional[str] = None) -> str:
    """Render the procedures page: every routine with its parameters"""
    title = f"Procedures: {_text(database_name)}"
    content = _page_header(title, DEFAULT_STYLE if css is None else css)
    content += _table_of_contents('procedure', procedures)

    if not procedures:
        content += "<p>No procedures found.</p>"

    for procedure_name, procedure in procedures.items():
        content += f"""
        <div class="section" id="{_anchor('procedure', procedure_name)}">
            <h2>{_text(procedure_name)}</h2>
"""
        if procedure.comment:
            content += f"""            <p class="description">{_text(procedure.comment)}</p>
"""
        content += f"""            <p><strong>Created:</strong> {_text(procedure.create_time)}
                <strong>Collation:</strong> {_text(procedure.collation)}</p>
            <h3>Parameters</h3>
"""
        if procedure.params:
            content += """            <table>
                <tr>
                    <th>Name</th>
                    <th>Direction</th>
                    <th>Type</th>
                </tr>
"""
            for param in procedure.params:
                content += f"""                <tr>
                    <td>{_or_na(param.name)}</td>
                    <td>{_or_na(param.direction)}</td>
                    <td>{_or_na(param.type)}</td>
                </tr>
"""
            content += """            </table>
"""
        else:
            content += """            <p>No parameters.</p>
"""
        content += """        </div>
"""

    return content + _page_footer()


def page_summary(tables: Dict[str, TableSchema], procedures: Dict[str, ProcedureSchema]) -> str:
    """One line count of what was documented"""
    field_count = sum(len(table.fields) for table in tables.values())
    index_count = sum(len(table.indexes) for table in tables.values())
    param_count = sum(len(procedure.params) for procedure in procedures.values())
    return (f"{len(tables)} tables, {field_count} columns, {index_count} indexes, "
            f"{len(procedures)} procedures, {param_count} parameters")
