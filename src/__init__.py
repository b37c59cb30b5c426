"""Date Range Slicer core packages."""
