"""
GeoTiles Test Suite

Structure:
- unit/: one module per component (extent, tile ids, grid, zones, assignment,
  tables, catalog, config, logging); in-memory tile store, no disk access
- integration/: Arrow files on disk through save / list / read and the build script
"""
