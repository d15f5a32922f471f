"""
airsafe core package.

Manages tables of airline safety-incident statistics stored in a single
SQLite database file:
- Schema management for the fixed incident table layout (`airsafe.incidents.schema`)
- CSV ingestion into a named table (`airsafe.incidents.load`)
- Ad-hoc read queries with positional row decoding (`airsafe.incidents.query`)
- A Typer-based CLI (`airsafe.cli`)

Configuration:
- Shared, project-wide anchors live in `airsafe.global_config`.
"""
