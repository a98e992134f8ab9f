"""Combined jobs aggregation package.

The package is structured around one request pipeline:
- `sources/` describes each upstream API (request shape, envelope, normalizer).
- `keys.py` rotates the outbound API keys.
- `invoker.py` calls one source; `aggregator.py` fans out over all of them.
- `export.py` turns the merged records into an .xlsx workbook.
- `server.py` exposes the workbook over HTTP.
"""
